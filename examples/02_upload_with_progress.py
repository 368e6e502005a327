"""
Multipart Upload Example

Uploads a file and follows progress through the UploadTask stream.
"""

import sys

from src.quickfire import (
    MultipartEncoder,
    MultipartField,
    NetworkConfig,
    NetworkManager,
    RequestSpec,
)
from src.quickfire.core.logging import LoggingConfig


class AvatarUpload(RequestSpec):
    endpoint = "POST /post"

    def __init__(self, path):
        field = MultipartField.from_path("avatar", path)
        super().__init__(multipart=MultipartEncoder().encode(field))


def upload_with_stream(manager, config, path):
    """Iterate progress snapshots until the upload settles."""
    print("\n=== Upload with progress stream ===")

    task = manager.upload(AvatarUpload(path), config=config)
    for progress in task.progress:
        print(f"  {progress.bytes_sent}/{progress.total_bytes} ({progress.fraction:.0%})")

    print(f"Server saw: {task.result.wait(timeout=60).get('files', {}).keys()}")


def upload_with_bar(manager, config, path):
    """Render a tqdm bar instead."""
    print("\n=== Upload with progress bar ===")

    task = manager.upload(AvatarUpload(path), config=config, show_progress=True)
    task.result.wait(timeout=60)


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else __file__
    config = NetworkConfig(base_url="https://httpbin.org")

    with NetworkManager(logging=LoggingConfig.create(level="INFO", format="colored")) as manager:
        upload_with_stream(manager, config, path)
        upload_with_bar(manager, config, path)
