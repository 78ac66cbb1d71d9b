from eventdesk.codec.records import RecordKind, decode, encode

__all__ = ["RecordKind", "decode", "encode"]
