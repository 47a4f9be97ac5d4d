from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for host application hooks.

    The host (e.g. the genogram editor) can implement these to show progress
    while patterns are being detected and to cancel a long analysis.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report analysis progress.

        Args:
            info (str): Progress message.
            target (int): Total number of steps, when starting a new phase.
            reset_counter (bool): Whether to reset the step counter.
            plus_step (int): Number of steps completed since the last report.
        """
        pass

    def stop_requested(self) -> bool:
        """
        Check if a stop has been requested by the user.

        Returns:
            bool: True if stop is requested, False otherwise.
        """
        return False
