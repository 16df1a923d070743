"""Blocking user prompts used while pairing and logging in.

Commands receive a Prompt through the Context, so they can be tested with
a fake. TerminalPrompt uses click for interactive shells; DialogPrompt
uses AppleScript dialogs for when the launcher runs us without a TTY.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass

import click

logger = logging.getLogger(__name__)

DIALOG_TITLE = 'Hue'


@dataclass(frozen=True)
class PromptField:
    """One value to ask the user for."""
    name: str
    hidden: bool = False
    default: str = ''


class Prompt:
    """Interface for blocking user interaction."""

    def show_message(self, message: str, cancellable: bool = False) -> bool:
        """Show a message and wait for the user.

        Returns:
            True if the user confirmed, False if they cancelled
        """
        raise NotImplementedError

    def prompt_user(self, fields: list[PromptField]) -> tuple[dict[str, str], bool]:
        """Ask for each field in turn.

        Returns:
            Tuple of (values by field name, confirmed). Values are partial
            when the user cancels.
        """
        raise NotImplementedError


class TerminalPrompt(Prompt):
    """Prompts on the controlling terminal."""

    def show_message(self, message: str, cancellable: bool = False) -> bool:
        click.echo(message, err=True)
        if not cancellable:
            return True
        return click.confirm("Continue?", default=True, err=True)

    def prompt_user(self, fields: list[PromptField]) -> tuple[dict[str, str], bool]:
        values = {}
        try:
            for f in fields:
                values[f.name] = click.prompt(f.name, default=f.default or None,
                                              hide_input=f.hidden, err=True)
        except click.Abort:
            return values, False
        return values, True


def _applescript_string(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


class DialogPrompt(Prompt):
    """Prompts with macOS dialogs via osascript."""

    def _run(self, script: str) -> subprocess.CompletedProcess:
        logger.debug("Running dialog script")
        return subprocess.run(['osascript', '-e', script], capture_output=True, text=True)

    def show_message(self, message: str, cancellable: bool = False) -> bool:
        buttons = '{"Cancel", "OK"}' if cancellable else '{"OK"}'
        script = (f'display dialog {_applescript_string(message)} '
                  f'with title {_applescript_string(DIALOG_TITLE)} '
                  f'buttons {buttons} default button "OK"')
        # osascript exits non-zero when Cancel is pressed
        return self._run(script).returncode == 0

    def prompt_user(self, fields: list[PromptField]) -> tuple[dict[str, str], bool]:
        values = {}
        for f in fields:
            script = (f'display dialog {_applescript_string(f.name)} '
                      f'with title {_applescript_string(DIALOG_TITLE)} '
                      f'default answer {_applescript_string(f.default)}')
            if f.hidden:
                script += ' with hidden answer'

            result = self._run(script)
            if result.returncode != 0:
                return values, False

            # Output looks like "button returned:OK, text returned:value"
            _, _, text = result.stdout.rstrip('\n').partition('text returned:')
            values[f.name] = text
        return values, True


def get_prompt(kind: str = 'auto') -> Prompt:
    """Pick a prompt implementation: 'dialog', 'terminal' or 'auto'."""
    if kind == 'auto':
        kind = 'terminal' if sys.stdin.isatty() else 'dialog'
    if kind == 'terminal':
        return TerminalPrompt()
    return DialogPrompt()
