# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions: downloading package files and fetching
vendor install scripts.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from common.errors import FetchError

module_logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    timeout: int = 120,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download a file from a given URL to a specified path.

    Args:
        url: The URL of the file.
        download_to_path: The file path where the download will be saved.
        timeout: Network timeout in seconds.
        current_logger: Optional logger instance.

    Returns:
        The path of the downloaded file.

    Raises:
        FetchError: On HTTP, connection, timeout or file I/O errors.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(download_to_path)
    logger_to_use.info(f"Downloading {url} to {download_path}")
    response: Optional[requests.Response] = None

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(download_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except requests.exceptions.HTTPError as http_err:
        status_code = (
            response.status_code if response is not None else "Unknown"
        )
        raise FetchError(
            f"HTTP error downloading {url}: {http_err} (status {status_code})",
            original_error=http_err,
        ) from http_err
    except requests.exceptions.ConnectionError as conn_err:
        raise FetchError(
            f"Connection error downloading {url}: {conn_err}",
            original_error=conn_err,
        ) from conn_err
    except requests.exceptions.Timeout as timeout_err:
        raise FetchError(
            f"Timed out downloading {url}: {timeout_err}",
            original_error=timeout_err,
        ) from timeout_err
    except requests.exceptions.RequestException as req_err:
        raise FetchError(
            f"Download of {url} failed: {req_err}", original_error=req_err
        ) from req_err
    except OSError as io_err:
        raise FetchError(
            f"File I/O error when saving {download_path}: {io_err}",
            original_error=io_err,
        ) from io_err
    finally:
        if response is not None:
            response.close()

    logger_to_use.info(f"Downloaded {url} to {download_path}")
    return download_path


def fetch_text(
    url: str,
    timeout: int = 120,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Fetch a small text resource, such as a vendor install script.

    Raises:
        FetchError: If the request fails or the body is empty.
    """
    logger_to_use = current_logger if current_logger else module_logger
    logger_to_use.info(f"Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as req_err:
        raise FetchError(
            f"Could not fetch {url}: {req_err}", original_error=req_err
        ) from req_err

    if not response.text.strip():
        raise FetchError(f"Empty response fetching {url}")
    return response.text
