"""Interfaces of the external collaborators the engine hands work to."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from dirkeeper._models import Entry


class CertificateImporter(abc.ABC):
    """Imports a certificate container together with its associated file."""

    @abc.abstractmethod
    def find_associated_file(self, entry: Entry) -> Path:
        """Locate the file that belongs with ``entry`` (e.g. a provisioning profile).

        :raises DirKeeperError: If none can be found.
        """

    @abc.abstractmethod
    def import_bundle(self, entry: Entry, associated_file: Path, password: str) -> str:
        """Import the bundle and return a success message.

        :raises InvalidPassword: If ``password`` is wrong.
        :raises DirKeeperError: For any other failure.
        """


class ArchiveService(abc.ABC):
    """Extracts archives and packages directory bundles into archives."""

    @abc.abstractmethod
    def extract(self, entry: Entry, into_directory: Path) -> None:
        """Extract ``entry`` into ``into_directory``.

        :raises DirKeeperError: If extraction fails.
        """

    @abc.abstractmethod
    def package_directory(self, entry: Entry, into_directory: Path) -> str:
        """Package the directory ``entry`` as an archive and return the output name.

        :raises DirKeeperError: If packaging fails.
        """
