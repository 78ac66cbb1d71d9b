"""
Metrics instrumentation for observability.
Counters live on the default prometheus_client registry; there is no
exposition endpoint, callers can read them with REGISTRY.get_sample_value.
"""

from prometheus_client import Counter

# Persistence metrics
records_loaded = Counter(
    'records_loaded_total',
    'Records decoded from persistence files',
    ['entity']  # users, events, attendees, inventory
)

records_skipped = Counter(
    'records_skipped_total',
    'Record lines skipped because they failed to decode',
    ['entity']
)

records_saved = Counter(
    'records_saved_total',
    'Records encoded and written to persistence files',
    ['entity']
)

# Allocation ledger metrics
allocation_attempts = Counter(
    'allocation_attempts_total',
    'Inventory allocation attempts',
    ['result']  # allocated, rejected
)

# Auth metrics
login_attempts = Counter(
    'login_attempts_total',
    'Login attempts',
    ['result']  # success, failure
)


# Convenience functions for instrumentation
def record_loaded(entity: str, count: int = 1):
    records_loaded.labels(entity=entity).inc(count)

def record_skipped(entity: str):
    records_skipped.labels(entity=entity).inc()

def record_saved(entity: str, count: int = 1):
    records_saved.labels(entity=entity).inc(count)

def record_allocation(allocated: bool):
    """Record allocation decision."""
    result = "allocated" if allocated else "rejected"
    allocation_attempts.labels(result=result).inc()

def record_login(success: bool):
    result = "success" if success else "failure"
    login_attempts.labels(result=result).inc()
