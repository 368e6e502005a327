"""
Tests for the tqdm upload progress bar.
"""

from src.quickfire.core.transport import UploadProgress
from src.quickfire.utils.progress import UploadProgressBar


class TestUploadProgressBar:
    def test_tracks_bytes(self):
        bar = UploadProgressBar(description="avatar.jpg")

        bar(UploadProgress(10, 100))
        bar(UploadProgress(60, 100))

        assert bar._bar.n == 60
        assert bar._bar.total == 100
        bar.close()

    def test_closes_when_complete(self):
        bar = UploadProgressBar()

        bar(UploadProgress(50, 100))
        bar(UploadProgress(100, 100))

        assert bar._bar is None

    def test_close_before_start(self):
        UploadProgressBar().close()
