"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (UploadPhoto).

Each command has a corresponding handler that contains the logic to execute
the command.
"""

from src.application.commands.upload_commands import UploadPhoto

__all__ = ["UploadPhoto"]
