"""
memrepo Resources: Virtual Directories.

Virtual directories have no entries of their own. Repositories create them
to make intermediate paths addressable, e.g. "/app" and "/app/views" when a
resource is added at "/app/views/index.twig".
"""

from typing import Dict

from memrepo.resources.base import DirectoryResource, Resource


class VirtualDirectoryResource(DirectoryResource):
    """A directory whose entries are whatever its repository stores below it."""

    def _list_own_entries(self) -> Dict[str, Resource]:
        return {}
