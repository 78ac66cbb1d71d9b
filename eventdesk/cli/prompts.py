"""
Prompt helpers for the interactive console.
Input and output functions are injectable so sessions can be scripted.
"""

from typing import Callable, Optional

class Console:
    """Thin wrapper over input()/print(). EOFError from input propagates."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def say(self, text: str = "") -> None:
        self._output(text)

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def ask_text(self, prompt: str) -> str:
        """Ask until a non-empty answer is given."""
        while True:
            value = self.ask(prompt)
            if value:
                return value
            self.say("Input cannot be empty.")

    def ask_optional(self, prompt: str) -> Optional[str]:
        """Blank answer means 'keep current' and returns None."""
        value = self.ask(prompt)
        return value or None

    def ask_int(self, prompt: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
        while True:
            raw = self.ask(prompt)
            try:
                value = int(raw)
            except ValueError:
                self.say("Invalid input. Please enter a whole number.")
                continue
            if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
                self.say(f"Invalid input. Please enter a number between {minimum} and {maximum}.")
                continue
            return value

    def ask_yes_no(self, prompt: str) -> bool:
        while True:
            answer = self.ask(f"{prompt} (y/n): ").lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self.say("Invalid input. Please enter 'y' or 'n'.")

    def menu(self, title: str, options: list[str]) -> int:
        """Print a numbered menu and return the chosen 1-based index."""
        self.say(f"\n=== {title} ===")
        for number, label in enumerate(options, start=1):
            self.say(f"{number}. {label}")
        return self.ask_int("Enter choice: ", 1, len(options))
