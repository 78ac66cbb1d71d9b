from eventdesk.cli.app import EventDeskApp
from eventdesk.cli.prompts import Console

__all__ = ["EventDeskApp", "Console"]
