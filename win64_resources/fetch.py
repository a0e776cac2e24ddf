#!/usr/bin/env python3
# coding=utf-8

import os
from urllib.parse import urljoin, urlsplit

import requests

from win64_resources.util import (
    ErrorKind, ProvisionError, rm_rf, run_tool,
)


def resolve_url(base_url: str, file_name: str) -> str:
    try:
        urlsplit(file_name).port
    except ValueError as e:
        raise ProvisionError(
            ErrorKind.URL,
            f"Could not parse file name ({file_name}) into URL: {e}") from e
    try:
        urlsplit(base_url).port
    except ValueError as e:
        raise ProvisionError(
            ErrorKind.URL,
            f"Could not parse base URL ({base_url}) into URL: {e}") from e
    return urljoin(base_url, file_name)


class Downloader:
    def download(self, url: str, target: str):
        raise NotImplementedError


class WgetDownloader(Downloader):
    def download(self, url, target):
        run_tool(["wget", "--quiet", "-O", target, url])


class RequestsDownloader(Downloader):
    chunk_size = 1 << 16

    def download(self, url, target):
        try:
            with requests.get(url, stream=True) as response:
                response.raise_for_status()
                with open(target, "wb") as f:
                    for chunk in response.iter_content(self.chunk_size):
                        f.write(chunk)
        except requests.exceptions.RequestException as e:
            raise ProvisionError(ErrorKind.TOOL,
                                 f"Downloading {url}: {e}") from e


def fetch_if_absent(workdir, local_name, url, downloader: Downloader):
    download_file = os.path.join(workdir, local_name)
    if os.path.exists(download_file):
        return download_file

    print(f"[Downloading package]: {url}")
    try:
        downloader.download(url, download_file)
    except ProvisionError:
        rm_rf(download_file)
        raise
    except OSError as e:
        rm_rf(download_file)
        raise ProvisionError(ErrorKind.FILESYSTEM,
                             f"Downloading {url}: {e}") from e
    return download_file
