#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Handles downloading and extracting release tarballs.

Downloads stream to a staging directory with requests; extraction uses
tarfile with the "data" filter so archive members cannot escape the
extraction directory. Neither function validates archive integrity beyond
what tarfile itself rejects.
"""

import logging
import shutil
import tarfile
from pathlib import Path
from typing import Optional, Union

import requests

from setup import config as static_config

module_logger = logging.getLogger(__name__)


class ProvisioningError(RuntimeError):
    """Raised when a provisioning action cannot complete."""


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    timeout: int = 300,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download `url` to `download_to_path`.

    Args:
        url: The URL of the file to download.
        download_to_path: Where the downloaded file is written. Parent
                          directories are created.
        timeout: Connect/read timeout in seconds.
        current_logger: Optional logger.

    Returns:
        The path of the downloaded file.

    Raises:
        requests.exceptions.RequestException: Network failure or an HTTP
            error status. A partially written file is removed first.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(download_to_path)
    logger_to_use.info(f"Downloading {url} to {download_path}")

    download_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(download_path, "wb") as f:
                for chunk in response.iter_content(
                    chunk_size=static_config.DOWNLOAD_CHUNK_SIZE
                ):
                    if chunk:
                        f.write(chunk)
    except requests.exceptions.HTTPError as http_err:
        logger_to_use.error(f"HTTP error while downloading {url}: {http_err}")
        download_path.unlink(missing_ok=True)
        raise
    except requests.exceptions.RequestException as req_err:
        logger_to_use.error(f"Download of {url} failed: {req_err}")
        download_path.unlink(missing_ok=True)
        raise

    logger_to_use.info(f"Downloaded {url} ({download_path.stat().st_size} bytes)")
    return download_path


def extract_tarball(
    archive_path: Union[str, Path],
    extract_to_dir: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Extract a (compressed) tar archive and return its single top-level
    directory.

    Release tarballs wrap their files in one directory (for example
    `wordpress/` or `phpMyAdmin-5.2.1-all-languages/`); returning it lets
    callers copy its contents, which is the equivalent of
    `tar --strip-components 1`.

    Raises:
        tarfile.TarError: The archive cannot be read.
        ProvisioningError: The archive does not have exactly one top-level
            directory.
    """
    logger_to_use = current_logger if current_logger else module_logger
    archive = Path(archive_path)
    extract_path = Path(extract_to_dir)

    logger_to_use.info(f"Extracting '{archive}' to '{extract_path}'")
    if extract_path.exists():
        shutil.rmtree(extract_path)
    extract_path.mkdir(parents=True)

    with tarfile.open(archive, "r:*") as tar:
        tar.extractall(extract_path, filter="data")

    entries = list(extract_path.iterdir())
    if len(entries) != 1 or not entries[0].is_dir():
        names = sorted(entry.name for entry in entries)
        raise ProvisioningError(
            f"Expected a single top-level directory in {archive}, found: {names}"
        )
    logger_to_use.debug(f"Archive root directory: {entries[0]}")
    return entries[0]


def remove_staging_paths(
    *paths: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """Removes staged downloads and extraction directories, ignoring ones
    that were never created."""
    logger_to_use = current_logger if current_logger else module_logger
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
        elif path.exists():
            path.unlink()
        else:
            continue
        logger_to_use.debug(f"Removed staging path {path}")
