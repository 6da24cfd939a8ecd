"""
Pieces shared by every command: proxy acquisition and the confirmation gate.
"""
import logging
from typing import Any, Callable, Dict, Optional

from ssrs_admin.client.connection import ReportingService, connect

logger = logging.getLogger(__name__)


def acquire_proxy(proxy: Optional[ReportingService], config: Optional[Dict[str, Any]]) -> ReportingService:
    """Reuses `proxy` when given, otherwise connects. Connection errors propagate as-is."""
    if proxy is not None:
        return proxy
    return connect(config)


class ConfirmationGate:
    what_if: bool
    confirm: bool
    _yes_to_all: bool

    """
    Decides whether a mutating command may touch a target.

    - what_if: report what would happen and never proceed (dry run).
    - confirm: ask before each target; "A" answers yes for the rest of this gate.
    - neither: always proceed.
    """
    def __init__(self, what_if: bool = False, confirm: bool = False, prompt: Optional[Callable[[str], str]] = None):
        self.what_if = what_if
        self.confirm = confirm
        self._prompt = prompt or input
        self._yes_to_all = False

    def should_process(self, target: str, action: str) -> bool:
        if self.what_if:
            logger.info(f'What if: Performing the operation "{action}" on target "{target}".')
            return False

        if not self.confirm or self._yes_to_all:
            return True

        question = (
            f'Are you sure you want to perform this action?\n'
            f'Performing the operation "{action}" on target "{target}".\n'
            f'[Y] Yes  [A] Yes to All  [N] No (default is "N"): '
        )
        try:
            answer = self._prompt(question).strip().lower()
        except EOFError:
            answer = ""

        if answer in ("a", "all"):
            self._yes_to_all = True
            return True
        if answer in ("y", "yes"):
            return True

        logger.info(f'Skipped "{action}" on "{target}": not confirmed.')
        return False
