# _*_ coding: utf-8 _*_
from galaxy_api.directory.active_directory import ActiveDirectoryClient
from galaxy_api.directory.protocol import DirectoryClient

__all__ = [
    "ActiveDirectoryClient",
    "DirectoryClient",
]
