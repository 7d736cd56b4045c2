"""Remote font source backed by a GitHub repository.

This module provides the GithubFontSource class, which retrieves the
recursive tree listing through the GitHub API and file contents through
the raw content host.
"""

import requests

from hoardview.config import RemoteConfig
from hoardview.domain import DirectoryEntry
from hoardview.exceptions import RemoteFetchError


class GithubFontSource:
    """Lists and downloads font sources from a GitHub repository.

    The tree listing goes through the API, which is rate limited; file
    contents come from the raw content host, which is not.

    Example:
        source = GithubFontSource(RemoteConfig())
        tree = source.fetch_tree()
        data = source.fetch_raw(tree[1].path)
    """

    def __init__(
        self,
        config: RemoteConfig,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the remote source.

        Args:
            config: Repository location and timeout
            session: HTTP session to use (a new one if None)
        """
        self._config = config
        self._session = session if session is not None else requests.Session()

    def fetch_tree(self) -> list[DirectoryEntry]:
        """Retrieve the recursive tree listing of the repository.

        Returns:
            Directory entries in the order delivered by GitHub

        Raises:
            RemoteFetchError: If the request fails or the payload is malformed
        """
        url = self._config.tree_url
        response = self._get(url)
        try:
            payload = response.json()
            return [DirectoryEntry.from_dict(item) for item in payload["tree"]]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteFetchError(url, f"unexpected listing payload: {e}") from e

    def fetch_raw(self, path: str) -> bytes:
        """Retrieve the contents of a file in the repository.

        Args:
            path: Path of the file relative to the repository root

        Returns:
            Raw file contents

        Raises:
            RemoteFetchError: If the request fails
        """
        return self._get(self.raw_url(path)).content

    def raw_url(self, path: str) -> str:
        """URL of a file on the raw content host."""
        return self._config.raw_file_url(path)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def _get(self, url: str) -> requests.Response:
        try:
            response = self._session.get(url, timeout=self._config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RemoteFetchError(url, str(e)) from e
        return response
