"""
memrepo Resources: In-memory files.

Example:
    >>> resource = FileResource("/css/style.css", "body { margin: 0 }")
    >>> resource.get_contents()
    b'body { margin: 0 }'
"""

from typing import Optional, Union

from memrepo.resources.base import Resource


class FileResource(Resource):
    """A leaf resource holding its contents in memory."""

    def __init__(
        self,
        path: Optional[str] = None,
        contents: Union[bytes, str] = b"",
        name: Optional[str] = None,
    ):
        """
        Initialize the file resource.

        Args:
            path: Optional absolute path of the file
            contents: File contents (str is encoded as UTF-8)
            name: File name. Defaults to the last segment of path.
        """
        super().__init__(path, name)
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self._contents = contents

    def get_contents(self) -> bytes:
        return self._contents

    def get_size(self) -> int:
        return len(self._contents)
