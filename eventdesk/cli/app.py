"""
Interactive console application.

Every menu entry is an action method run through run_operation, which is the
operation boundary: domain errors come back as an OperationResult, get
printed, and control returns to the menu. An AuthError result ends the
session. Storage failures are reported separately and never end the process.
Successful actions marked as mutating are followed by a full save.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from eventdesk.cli.prompts import Console
from eventdesk.cli.render import format_attendee, format_event, format_item, format_user
from eventdesk.core.config import Settings
from eventdesk.core.errors import ErrorCode, PersistenceError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.core.result import run_operation
from eventdesk.models import EventStatus, Role, User
from eventdesk.schemas import (
    AllocationRequest,
    AttendeeCreate,
    ContactUpdate,
    EventCreate,
    EventSearch,
    EventUpdate,
    InventoryItemCreate,
    InventoryItemUpdate,
    UserCreate,
    UserLogin,
)
from eventdesk.services import (
    attendee_service,
    auth_service,
    event_service,
    inventory_service,
    ledger,
    report_service,
)
from eventdesk.store.entity_store import EntityStore
from eventdesk.store.interfaces import RecordGateway

logger = get_logger(__name__)


@dataclass(frozen=True)
class MenuEntry:
    label: str
    action: Optional[str]  # method name; None means logout
    mutates: bool = False


LOGOUT = MenuEntry("Logout", None)

ADMIN_MENU = [
    MenuEntry("Create Event", "create_event", True),
    MenuEntry("View Events", "view_events"),
    MenuEntry("Search Events", "search_events"),
    MenuEntry("Edit Event", "edit_event", True),
    MenuEntry("Set Event Status", "set_event_status", True),
    MenuEntry("Delete Event", "delete_event", True),
    MenuEntry("Register Attendee", "register_attendee", True),
    MenuEntry("View Attendees", "view_attendees"),
    MenuEntry("Check In Attendee", "check_in_attendee", True),
    MenuEntry("Cancel Registration", "cancel_registration", True),
    MenuEntry("Add Inventory Item", "add_inventory_item", True),
    MenuEntry("View Inventory", "view_inventory"),
    MenuEntry("Edit Inventory Item", "edit_inventory_item", True),
    MenuEntry("Set Item Total Quantity", "set_item_total", True),
    MenuEntry("Delete Inventory Item", "delete_inventory_item", True),
    MenuEntry("Allocate Inventory", "allocate_inventory", True),
    MenuEntry("Deallocate Inventory", "deallocate_inventory", True),
    MenuEntry("View Event Allocations", "view_event_allocations"),
    MenuEntry("Attendance Report", "attendance_report"),
    MenuEntry("Inventory Report", "inventory_report"),
    MenuEntry("Export Attendee List", "export_attendee_list"),
    MenuEntry("Export Data", "export_data"),
    MenuEntry("Audit Allocations", "audit_allocations"),
    MenuEntry("Register New User", "register_new_user", True),
    MenuEntry("View Users", "view_users"),
    MenuEntry("Delete User", "delete_user", True),
    LOGOUT,
]

USER_MENU = [
    MenuEntry("View Events", "view_events"),
    MenuEntry("Search Events", "search_events"),
    MenuEntry("Register for Event", "register_for_event", True),
    MenuEntry("View My Registrations", "view_my_registrations"),
    MenuEntry("Update Contact Info", "update_contact_info", True),
    MenuEntry("Cancel My Registration", "cancel_my_registration", True),
    LOGOUT,
]

MENUS = {
    Role.ADMIN: ("Admin Menu", ADMIN_MENU),
    Role.REGULAR_USER: ("User Menu", USER_MENU),
}


class EventDeskApp:
    def __init__(self, store: EntityStore, gateway: RecordGateway, settings: Settings, console: Console):
        self.store = store
        self.gateway = gateway
        self.settings = settings
        self.console = console

    # --- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Load every record file and seed the default admin if needed."""
        self.store.load(self.gateway.load_all())
        admin = auth_service.seed_default_admin(self.store, self.settings)
        if admin:
            self.save()
            self.console.say(
                f"Default admin account created (username: {admin.username}, "
                f"password: {self.settings.DEFAULT_ADMIN_PASSWORD})"
            )

    def save(self) -> None:
        self.gateway.save_all(self.store.snapshot())

    def run(self) -> int:
        """Top-level loop. Returns the process exit code."""
        self.console.say(f"{self.settings.APP_NAME} {self.settings.APP_VERSION}")
        try:
            while True:
                choice = self.console.menu(self.settings.APP_NAME, ["Login", "Register", "Exit"])
                if choice == 1:
                    user = self._attempt_login()
                elif choice == 2:
                    user = self._attempt_register()
                else:
                    break
                if user is not None:
                    self.session(user)
        except EOFError:
            self.console.say("")
        self._final_save()
        self.console.say("Goodbye!")
        return 0

    def _final_save(self) -> None:
        try:
            self.save()
        except PersistenceError as e:
            logger.error("final_save_failed", path=e.path, error=e.reason)
            self.console.say(f"Storage error: {e}")

    # --- authentication -----------------------------------------------------

    def _attempt_login(self) -> Optional[User]:
        self.console.say("\n=== Login ===")
        username = self.console.ask("Username: ")
        password = self.console.ask("Password: ")
        result = run_operation(
            auth_service.authenticate_user, self.store, UserLogin(username=username, password=password)
        )
        if not result.ok:
            self.console.say(f"Authentication failed: {result.error.message}")
            return None
        self.console.say(f"\nLogin successful! Welcome, {result.value.username}.")
        return result.value

    def _attempt_register(self) -> Optional[User]:
        result = run_operation(self._register_self)
        if not result.ok:
            self.console.say(f"Registration failed: {result.error.message}")
            return None
        if not self._guarded_save():
            return None
        self.console.say("\nRegistration and login successful!")
        return result.value

    def _register_self(self) -> User:
        self.console.say("\n=== Register ===")
        username = self.console.ask_text("Username (4-100 chars): ")
        password = self.console.ask("Password (6-100 chars): ")
        confirm = self.console.ask("Confirm Password: ")
        if password != confirm:
            raise ValidationError("Passwords do not match")
        return auth_service.register_user(
            self.store, UserCreate(username=username, password=password, role=Role.REGULAR_USER)
        )

    # --- session ------------------------------------------------------------

    def session(self, user: User) -> None:
        """Run the menu for the user's role until logout or an auth failure."""
        if user.role not in MENUS:
            self.console.say("This account has no menu available.")
            return

        title, entries = MENUS[user.role]
        structlog.contextvars.bind_contextvars(username=user.username, role=user.role.name)
        try:
            while True:
                entry = entries[self.console.menu(title, [e.label for e in entries]) - 1]
                if entry is LOGOUT:
                    self.console.say("Logged out successfully.")
                    return

                check = run_operation(auth_service.ensure_session, self.store, user)
                if not check.ok:
                    self.console.say(f"Error: {check.error.message}")
                    return
                user = check.value

                result = run_operation(getattr(self, entry.action), user)
                if not result.ok:
                    self.console.say(f"Error: {result.error.message}")
                    if result.kind is ErrorCode.AUTH:
                        return
                    continue
                if entry.mutates:
                    self._guarded_save()
        finally:
            structlog.contextvars.unbind_contextvars("username", "role")

    def _guarded_save(self) -> bool:
        try:
            self.save()
        except PersistenceError as e:
            logger.error("save_failed", path=e.path, error=e.reason)
            self.console.say(f"Storage error: {e}. Changes are kept in memory only.")
            return False
        return True

    # --- shared prompts -----------------------------------------------------

    def _ask_event_id(self) -> int:
        return self.console.ask_int("Enter event ID: ", 1)

    def _ask_item_id(self) -> int:
        return self.console.ask_int("Enter item ID: ", 1)

    def _ask_status(self, prompt: str) -> Optional[EventStatus]:
        raw = self.console.ask_optional(prompt)
        if raw is None:
            return None
        try:
            return EventStatus.from_label(raw)
        except ValueError:
            raise ValidationError(
                "Status must be one of: Upcoming, Ongoing, Completed, Canceled"
            ) from None

    # --- event actions ------------------------------------------------------

    def create_event(self, user: User) -> None:
        c = self.console
        c.say("\n=== Create New Event ===")
        data = EventCreate(
            name=c.ask_text("Event Name: "),
            date=c.ask_text("Date (YYYY-MM-DD): "),
            time=c.ask_text("Time (HH:MM): "),
            location=c.ask("Location: "),
            description=c.ask("Description: "),
            category=c.ask("Category (Conference, Social, etc.): "),
        )
        event = event_service.create_event(self.store, data)
        c.say("\nEvent created successfully!")
        c.say(format_event(event, self.store))

    def view_events(self, user: User) -> None:
        events = event_service.list_events(self.store)
        self.console.say(f"\n=== Events ({len(events)}) ===")
        if not events:
            self.console.say("No events found.")
        for event in events:
            self.console.say(format_event(event, self.store))

    def search_events(self, user: User) -> None:
        keyword = self.console.ask("Enter search keyword (name or date): ")
        events = event_service.search_events(self.store, EventSearch(keyword=keyword))
        if not events:
            self.console.say("No events matching the search criteria.")
        for event in events:
            self.console.say(format_event(event, self.store))

    def edit_event(self, user: User) -> None:
        c = self.console
        event = event_service.get_event(self.store, self._ask_event_id())
        c.say(format_event(event, self.store))
        c.say("\nEnter new details (leave blank to keep current value):")
        changes = EventUpdate(
            name=c.ask_optional(f"Name [{event.name}]: "),
            date=c.ask_optional(f"Date (YYYY-MM-DD) [{event.date}]: "),
            time=c.ask_optional(f"Time (HH:MM) [{event.time}]: "),
            location=c.ask_optional(f"Location [{event.location}]: "),
            description=c.ask_optional(f"Description [{event.description}]: "),
            category=c.ask_optional(f"Category [{event.category}]: "),
            status=self._ask_status(f"Status (Upcoming/Ongoing/Completed/Canceled) [{event.status.label}]: "),
        )
        event_service.update_event(self.store, event.id, changes)
        c.say("\nEvent updated successfully!")

    def set_event_status(self, user: User) -> None:
        event_id = self._ask_event_id()
        status = self._ask_status("New status (Upcoming/Ongoing/Completed/Canceled): ")
        if status is None:
            raise ValidationError("Status is required")
        event = event_service.set_status(self.store, event_id, status)
        self.console.say(f"\nEvent {event.id} is now {event.status.label}.")

    def delete_event(self, user: User) -> None:
        c = self.console
        event = event_service.get_event(self.store, self._ask_event_id())
        c.say("You are about to delete this event:")
        c.say(format_event(event, self.store))
        if not c.ask_yes_no("Are you sure you want to delete this event?"):
            c.say("Deletion cancelled.")
            return
        event_service.delete_event(self.store, event.id)
        c.say("\nEvent deleted successfully!")

    # --- attendee actions ---------------------------------------------------

    def register_attendee(self, user: User) -> None:
        c = self.console
        event_id = self._ask_event_id()
        data = AttendeeCreate(name=c.ask_text("Attendee Name: "), contact_info=c.ask_text("Contact Info: "))
        attendee = attendee_service.register_attendee(self.store, event_id, data)
        c.say(f"\nAttendee registered successfully! Attendee ID: {attendee.attendee_id}")

    def view_attendees(self, user: User) -> None:
        roster = attendee_service.list_attendees(self.store, self._ask_event_id())
        if not roster:
            self.console.say("No attendees found for this event.")
        for attendee_id, attendee in roster:
            if attendee is None:
                self.console.say(f"\nAttendee ID: {attendee_id}\n(profile not found)")
            else:
                self.console.say(format_attendee(attendee, self.store))

    def check_in_attendee(self, user: User) -> None:
        event_id = self._ask_event_id()
        attendee_id = self.console.ask_int("Enter attendee ID: ", 1)
        attendee_service.check_in(self.store, event_id, attendee_id)
        self.console.say("\nAttendee checked in successfully!")

    def cancel_registration(self, user: User) -> None:
        event_id = self._ask_event_id()
        attendee_id = self.console.ask_int("Enter attendee ID: ", 1)
        attendee_service.cancel_registration(self.store, event_id, attendee_id)
        self.console.say("\nRegistration cancelled.")

    def register_for_event(self, user: User) -> None:
        c = self.console
        event_id = self._ask_event_id()
        contact = None
        if self.store.attendees.find_by_id(user.id) is None:
            contact = ContactUpdate(contact_info=c.ask_text("Contact Info: "))
        attendee_service.register_self(self.store, user, event_id, contact)
        c.say("\nSuccessfully registered for the event!")

    def view_my_registrations(self, user: User) -> None:
        events = attendee_service.my_registrations(self.store, user)
        self.console.say("\n=== Your Registrations ===")
        if not events:
            self.console.say("You are not registered for any events.")
        for event in events:
            self.console.say(format_event(event, self.store))

    def update_contact_info(self, user: User) -> None:
        c = self.console
        attendee = attendee_service.get_own_profile(self.store, user)
        c.say(f"Current contact info: {attendee.contact_info}")
        update = ContactUpdate(contact_info=c.ask_text("Enter new contact info: "))
        attendee_service.update_my_contact_info(self.store, user, update)
        c.say("Contact info updated successfully!")

    def cancel_my_registration(self, user: User) -> None:
        attendee_service.cancel_my_registration(self.store, user, self._ask_event_id())
        self.console.say("\nYour registration has been cancelled.")

    # --- inventory actions --------------------------------------------------

    def add_inventory_item(self, user: User) -> None:
        c = self.console
        data = InventoryItemCreate(
            name=c.ask_text("Item Name: "),
            total_quantity=c.ask_int("Quantity: ", 0),
            description=c.ask("Description: "),
        )
        item = inventory_service.add_item(self.store, data)
        c.say(f"\nInventory item added successfully! Item ID: {item.item_id}")

    def view_inventory(self, user: User) -> None:
        items = inventory_service.list_items(self.store)
        self.console.say("\n=== Inventory ===")
        if not items:
            self.console.say("No inventory items found.")
        for item in items:
            self.console.say(format_item(item))

    def edit_inventory_item(self, user: User) -> None:
        c = self.console
        item = inventory_service.get_item(self.store, self._ask_item_id())
        changes = InventoryItemUpdate(
            name=c.ask_optional(f"Name [{item.name}]: "),
            description=c.ask_optional(f"Description [{item.description}]: "),
        )
        inventory_service.update_item(self.store, item.item_id, changes)
        c.say("\nInventory item updated successfully!")

    def set_item_total(self, user: User) -> None:
        item_id = self._ask_item_id()
        new_total = self.console.ask_int("New total quantity: ")
        item = inventory_service.set_total_quantity(self.store, item_id, new_total)
        self.console.say(f"\n{item.name}: total {item.total_quantity}, available {item.available_quantity}")

    def delete_inventory_item(self, user: User) -> None:
        item = inventory_service.delete_item(self.store, self._ask_item_id())
        self.console.say(f"\n{item.name} deleted.")

    def allocate_inventory(self, user: User) -> None:
        c = self.console
        request = AllocationRequest(
            item_id=self._ask_item_id(),
            event_id=self._ask_event_id(),
            quantity=c.ask_int("Quantity: "),
        )
        item = inventory_service.allocate_to_event(self.store, request)
        c.say(f"\nInventory allocated successfully! {item.name} available: {item.available_quantity}")

    def deallocate_inventory(self, user: User) -> None:
        c = self.console
        item_id = self._ask_item_id()
        event_id = self._ask_event_id()
        qty = c.ask_int("Quantity: ", 1)
        removed = inventory_service.deallocate_from_event(self.store, item_id, event_id, qty)
        if removed == 0:
            c.say("\nThat item is not allocated to this event.")
        else:
            c.say(f"\nReturned {removed} to inventory.")

    def view_event_allocations(self, user: User) -> None:
        rows = inventory_service.event_allocations(self.store, self._ask_event_id())
        if not rows:
            self.console.say("No inventory allocated to this event.")
        for item_id, name, qty in rows:
            self.console.say(f"{item_id}\t{name}\t{qty}")

    # --- reports ------------------------------------------------------------

    def attendance_report(self, user: User) -> None:
        self.console.say("\n=== Attendance Report ===")
        self.console.say(report_service.render_attendance_report(report_service.attendance_report(self.store)))

    def inventory_report(self, user: User) -> None:
        self.console.say("\n=== Inventory Report ===")
        self.console.say(report_service.render_inventory_report(report_service.inventory_report(self.store)))

    def export_attendee_list(self, user: User) -> None:
        path = report_service.export_attendee_list(self.store, self._ask_event_id(), self.settings.EXPORT_DIR)
        self.console.say(f"\nAttendee list exported to {path} successfully!")

    def export_data(self, user: User) -> None:
        exporters = [
            report_service.export_events,
            report_service.export_attendees,
            report_service.export_inventory,
        ]
        choice = self.console.menu(
            "Export Data", ["Export Events", "Export Attendees", "Export Inventory", "Cancel"]
        )
        if choice == 4:
            self.console.say("\nExport canceled.")
            return
        path = exporters[choice - 1](self.store, self.settings.EXPORT_DIR)
        self.console.say(f"\nExported to {path} successfully!")

    def audit_allocations(self, user: User) -> None:
        drift = ledger.audit(self.store)
        if not drift:
            self.console.say("\nAllocations are consistent.")
            return
        self.console.say("\nItem\tRecorded\tFrom Events")
        for d in drift:
            self.console.say(f"{d.item_name} ({d.item_id})\t{d.recorded}\t{d.from_events}")

    # --- user admin ---------------------------------------------------------

    def register_new_user(self, user: User) -> None:
        c = self.console
        c.say("\n=== Register New User ===")
        username = c.ask_text("Username: ")
        password = c.ask("Password: ")
        role = Role.ADMIN if c.ask_yes_no("Is this user an admin?") else Role.REGULAR_USER
        created = auth_service.register_user(
            self.store, UserCreate(username=username, password=password, role=role)
        )
        c.say(f"\nUser registered successfully! User ID: {created.id}")

    def view_users(self, user: User) -> None:
        users = auth_service.list_users(self.store)
        self.console.say(f"\n=== All Users ({len(users)}) ===")
        for u in users:
            self.console.say(format_user(u))

    def delete_user(self, user: User) -> None:
        target_id = self.console.ask_int("Enter user ID to delete: ", 1)
        deleted = auth_service.delete_user(self.store, target_id, user)
        self.console.say(f"\nUser {deleted.username} deleted.")
