"""
Terminal progress bar for uploads (tqdm).
"""

from typing import Optional

from tqdm import tqdm

from ..core.transport import UploadProgress


class UploadProgressBar:
    """
    Progress callback that renders a tqdm bar.

    The bar is created lazily on the first snapshot, when the total size is
    known, and closed once all bytes have been sent.

    Example:
        >>> bar = UploadProgressBar(description="avatar.jpg")
        >>> spec.execute(on_progress=bar)
    """

    def __init__(self, description: Optional[str] = None):
        self.description = description
        self._bar: Optional[tqdm] = None
        self._last = 0

    def __call__(self, progress: UploadProgress) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=progress.total_bytes,
                unit='B',
                unit_scale=True,
                desc=self.description,
            )
        self._bar.update(progress.bytes_sent - self._last)
        self._last = progress.bytes_sent

        if progress.total_bytes and progress.bytes_sent >= progress.total_bytes:
            self.close()

    def close(self, *_args) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
