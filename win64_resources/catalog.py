#!/usr/bin/env python3
# coding=utf-8

import json
import os
from dataclasses import dataclass
from typing import List
from urllib.parse import urlparse

from win64_resources.util import ErrorKind, ProvisionError


ARCHIVE_SUFFIXES = (".zip", ".tar.gz")


@dataclass(frozen=True)
class PackageDescriptor:
    name: str
    base_url: str
    dll_name: str
    dev_name: str
    expanded_dev_name: str
    version: str

    @property
    def dll_file(self) -> str:
        return self.dll_name % self.version

    @property
    def dev_file(self) -> str:
        return self.dev_name % self.version

    @property
    def expanded_dir(self) -> str:
        return self.expanded_dev_name % self.version


PACKAGES = [
    PackageDescriptor(
        name="SDL",
        base_url="https://www.libsdl.org/release/",
        dll_name="SDL2-%s-win32-x64.zip",
        dev_name="SDL2-devel-%s-mingw.tar.gz",
        expanded_dev_name="SDL2-%s",
        version="2.0.8",
    ),
    PackageDescriptor(
        name="SDL_image",
        base_url="https://www.libsdl.org/projects/SDL_image/release/",
        dll_name="SDL2_image-%s-win32-x64.zip",
        dev_name="SDL2_image-devel-%s-mingw.tar.gz",
        expanded_dev_name="SDL2_image-%s",
        version="2.0.3",
    ),
    PackageDescriptor(
        name="SDL_ttf",
        base_url="https://www.libsdl.org/projects/SDL_ttf/release/",
        dll_name="SDL2_ttf-%s-win32-x64.zip",
        dev_name="SDL2_ttf-devel-%s-mingw.tar.gz",
        expanded_dev_name="SDL2_ttf-%s",
        version="2.0.14",
    ),
]

_FIELDS = ("name", "base_url", "dll_name", "dev_name",
           "expanded_dev_name", "version")


def _config_error(message):
    return ProvisionError(ErrorKind.CONFIG, message)


def validate_package(pkg: PackageDescriptor) -> PackageDescriptor:
    if not pkg.name:
        raise _config_error("Package name is empty.")
    if not pkg.version:
        raise _config_error(f"Package {pkg.name} has an empty version.")

    try:
        names = (pkg.dll_file, pkg.dev_file, pkg.expanded_dir)
    except (TypeError, ValueError) as e:
        raise _config_error(
            f"Package {pkg.name} has a bad filename template: {e}") from e

    for file_name in names[:2]:
        if not file_name.endswith(ARCHIVE_SUFFIXES):
            raise _config_error(
                f"Package {pkg.name}: {file_name} is not a .zip or .tar.gz")

    url = urlparse(pkg.base_url)
    if not url.scheme or not url.netloc:
        raise _config_error(
            f"Package {pkg.name}: base url {pkg.base_url} is not absolute")
    return pkg


def _parse_entry(entry) -> PackageDescriptor:
    if not isinstance(entry, dict):
        raise _config_error(f"Catalog entry is not an object: {entry!r}")
    missing = [k for k in _FIELDS if k not in entry]
    if missing:
        raise _config_error(
            f"Catalog entry {entry.get('name', '?')} misses {missing}")
    return validate_package(
        PackageDescriptor(**{k: str(entry[k]) for k in _FIELDS}))


def load_catalog(json_file) -> List[PackageDescriptor]:
    '''
    Accepts either a list of package objects or {"packages": [...]}.
    '''
    if not os.path.isfile(json_file):
        raise _config_error(f"Not found [{json_file}].")
    try:
        with open(json_file, 'r', encoding='utf-8') as f:
            json_data = json.load(f)
    except (OSError, ValueError) as e:
        raise _config_error(f"Parser json error: [{str(e)}].") from e

    if isinstance(json_data, dict):
        json_data = json_data.get("packages")
    if not isinstance(json_data, list):
        raise _config_error(f"{json_file}: expected a list of packages")

    return [_parse_entry(entry) for entry in json_data]
