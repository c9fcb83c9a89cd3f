"""Progress side channel for long transfers."""


class TransferMonitor:
    """Receives liveness notifications from the transfer engine.

    The default implementation ignores everything. Subclasses render
    progress (see console.RichMonitor) or record events in tests.
    """

    def start(self, label: str, pages: int) -> None:
        """A whole-device transfer of the given number of pages begins."""

    def page_done(self, address: int, length: int) -> None:
        """One page at address has been transferred."""

    def retry(self, address: int, stage: str) -> None:
        """A transient failure at address during stage ("write", "address", "read")."""

    def finish(self) -> None:
        """The whole-device transfer has ended, successfully or not."""


NULL_MONITOR = TransferMonitor()
