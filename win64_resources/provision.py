#!/usr/bin/env python3
# coding=utf-8

import os
from dataclasses import dataclass, field
from typing import List, Tuple

from win64_resources.archive import (
    Extractor, NativeExtractor, ShellExtractor, expand_archive,
)
from win64_resources.catalog import PackageDescriptor
from win64_resources.fetch import (
    Downloader, RequestsDownloader, WgetDownloader,
    fetch_if_absent, resolve_url,
)
from win64_resources.place import (
    Copier, NativeCopier, ShellCopier,
    place_development_subdirs, place_dlls,
)
from win64_resources.util import (
    ProvisionError, make_dirs, print_error, print_info, print_success,
)


VENDOR_DIR = os.path.join("vendor", "sdl")
OUT_DIR = os.path.join("out", "win64")
MINGW_PREFIX = "/usr/x86_64-w64-mingw32"


@dataclass
class Settings:
    root: str = field(default_factory=os.getcwd)
    vendor_dir: str = VENDOR_DIR
    out_dir: str = OUT_DIR
    prefix: str = MINGW_PREFIX
    native: bool = False
    use_sudo: bool = True
    keep_going: bool = False

    @property
    def vendor_path(self) -> str:
        return os.path.join(self.root, self.vendor_dir)

    @property
    def out_path(self) -> str:
        return os.path.join(self.root, self.out_dir)

    def make_tools(self) -> Tuple[Downloader, Extractor, Copier]:
        if self.native:
            return RequestsDownloader(), NativeExtractor(), NativeCopier()
        return (WgetDownloader(), ShellExtractor(),
                ShellCopier(elevated=self.use_sudo))


@dataclass
class ProvisionSummary:
    completed: List[str] = field(default_factory=list)
    failed: List[Tuple[str, ProvisionError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def provision_package(pkg: PackageDescriptor, settings: Settings,
                      downloader: Downloader, extractor: Extractor,
                      copier: Copier):
    print_info(f"[Provisioning]: {pkg.name} {pkg.version}")
    make_dirs(settings.out_path)
    workdir = make_dirs(os.path.join(settings.vendor_path, pkg.name))

    dll_url = resolve_url(pkg.base_url, pkg.dll_file)
    dev_url = resolve_url(pkg.base_url, pkg.dev_file)

    fetch_if_absent(workdir, pkg.dll_file, dll_url, downloader)
    fetch_if_absent(workdir, pkg.dev_file, dev_url, downloader)

    expand_archive(workdir, pkg.dll_file, pkg.expanded_dir, extractor)
    expand_archive(workdir, pkg.dev_file, pkg.expanded_dir, extractor)

    place_dlls(workdir, settings.out_path, copier)
    place_development_subdirs(workdir, pkg.expanded_dir,
                              settings.prefix, copier)


def provision_all(packages, settings: Settings,
                  downloader=None, extractor=None,
                  copier=None) -> ProvisionSummary:
    '''
    Fail fast unless settings.keep_going, in which case failures are
    collected in the summary and the next package is processed.
    '''
    default_tools = settings.make_tools()
    downloader = downloader or default_tools[0]
    extractor = extractor or default_tools[1]
    copier = copier or default_tools[2]

    summary = ProvisionSummary()
    for pkg in packages:
        try:
            provision_package(pkg, settings, downloader, extractor, copier)
        except ProvisionError as e:
            if not settings.keep_going:
                raise
            print_error(f"{pkg.name}: {e}")
            summary.failed.append((pkg.name, e))
            continue
        print_success(f"[Provisioned]: {pkg.name}")
        summary.completed.append(pkg.name)

    return summary
