"""History sink that announces completed work periods without persisting them."""

from __future__ import annotations

import logging
from typing import Optional

from .ui import RuntimeUIPublisher


class LoggingHistorySink:
    """Counts completions for this run and forwards them to the log and UI."""

    def __init__(
        self,
        ui: RuntimeUIPublisher,
        logger: Optional[logging.Logger] = None,
    ):
        self._ui = ui
        self._logger = logger or logging.getLogger("history")
        self._recorded = 0

    @property
    def recorded(self) -> int:
        return self._recorded

    def record_completed_work_period(self) -> None:
        self._recorded += 1
        self._logger.info("Work period finished (%d this run)", self._recorded)
        self._ui.publish_completed_work_period(self._recorded)
