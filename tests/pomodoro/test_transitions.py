import itertools
import unittest

from pomodoro import PeriodAction, PeriodStatus, PeriodType, resolve_action, resolve_next_period

EXPECTED_ACTIONS = {
    (PeriodStatus.STOPPED, PeriodStatus.RUNNING): PeriodAction.START,
    (PeriodStatus.RUNNING, PeriodStatus.PAUSED): PeriodAction.PAUSE,
    (PeriodStatus.RUNNING, PeriodStatus.COMPLETED): PeriodAction.COMPLETE,
    (PeriodStatus.PAUSED, PeriodStatus.RUNNING): PeriodAction.UNPAUSE,
    (PeriodStatus.PAUSED, PeriodStatus.STOPPED): PeriodAction.RESET,
    (PeriodStatus.COMPLETED, PeriodStatus.RUNNING): PeriodAction.START,
    (PeriodStatus.COMPLETED, PeriodStatus.STOPPED): PeriodAction.RESET,
}


class ResolveActionTests(unittest.TestCase):
    def test_every_status_pair_matches_transition_table(self) -> None:
        for current, requested in itertools.product(PeriodStatus, PeriodStatus):
            with self.subTest(current=current, requested=requested):
                expected = EXPECTED_ACTIONS.get((current, requested), PeriodAction.NO_ACTION)
                self.assertEqual(expected, resolve_action(current, requested))

    def test_same_status_is_never_a_transition(self) -> None:
        for status in PeriodStatus:
            self.assertEqual(PeriodAction.NO_ACTION, resolve_action(status, status))


class ResolveNextPeriodTests(unittest.TestCase):
    def _next(
        self,
        period_type: PeriodType,
        status: PeriodStatus,
        completed: int = 0,
        running: bool = False,
    ) -> PeriodType:
        return resolve_next_period(
            period_type=period_type,
            status=status,
            completed_work_periods=completed,
            timer_running=running,
            long_break_every=4,
        )

    def test_running_timer_keeps_current_period(self) -> None:
        self.assertEqual(
            PeriodType.SHORT_BREAK,
            self._next(PeriodType.SHORT_BREAK, PeriodStatus.RUNNING, running=True),
        )

    def test_stopped_session_starts_work(self) -> None:
        self.assertEqual(PeriodType.WORK, self._next(PeriodType.LONG_BREAK, PeriodStatus.STOPPED))

    def test_completed_work_alternates_short_and_long_breaks(self) -> None:
        for completed in range(1, 13):
            expected = PeriodType.LONG_BREAK if completed % 4 == 0 else PeriodType.SHORT_BREAK
            with self.subTest(completed=completed):
                self.assertEqual(
                    expected,
                    self._next(PeriodType.WORK, PeriodStatus.COMPLETED, completed),
                )

    def test_completed_break_returns_to_work(self) -> None:
        for period_type in (PeriodType.SHORT_BREAK, PeriodType.LONG_BREAK):
            with self.subTest(period_type=period_type):
                self.assertEqual(
                    PeriodType.WORK,
                    self._next(period_type, PeriodStatus.COMPLETED, completed=4),
                )

    def test_paused_period_keeps_current_type(self) -> None:
        self.assertEqual(
            PeriodType.LONG_BREAK,
            self._next(PeriodType.LONG_BREAK, PeriodStatus.PAUSED, completed=4),
        )

    def test_custom_long_break_interval(self) -> None:
        result = resolve_next_period(
            period_type=PeriodType.WORK,
            status=PeriodStatus.COMPLETED,
            completed_work_periods=2,
            timer_running=False,
            long_break_every=2,
        )
        self.assertEqual(PeriodType.LONG_BREAK, result)


if __name__ == "__main__":
    unittest.main()
