import io
import os
import tarfile
import zipfile

import pytest

from win64_resources.archive import Extractor
from win64_resources.catalog import PackageDescriptor
from win64_resources.fetch import Downloader
from win64_resources.util import ErrorKind, ProvisionError


SDL = PackageDescriptor(
    name="SDL",
    base_url="https://www.libsdl.org/release/",
    dll_name="SDL2-%s-win32-x64.zip",
    dev_name="SDL2-devel-%s-mingw.tar.gz",
    expanded_dev_name="SDL2-%s",
    version="2.0.8",
)

SDL_RUNTIME_FILES = {
    "SDL2.dll": b"MZ sdl2 runtime",
    "README-SDL.txt": b"readme",
}

SDL_DEV_FILES = {
    "SDL2-2.0.8/x86_64-w64-mingw32/bin/sdl2-config": b"#!/bin/sh\n",
    "SDL2-2.0.8/x86_64-w64-mingw32/bin/SDL2.dll": b"MZ dev copy",
    "SDL2-2.0.8/x86_64-w64-mingw32/include/SDL2/SDL.h": b"/* SDL.h */",
    "SDL2-2.0.8/x86_64-w64-mingw32/lib/libSDL2.a": b"!<arch>\n",
    "SDL2-2.0.8/x86_64-w64-mingw32/lib/pkgconfig/sdl2.pc": b"Name: sdl2",
    "SDL2-2.0.8/x86_64-w64-mingw32/share/aclocal/sdl2.m4": b"dnl m4",
    "SDL2-2.0.8/i686-w64-mingw32/lib/libSDL2.a": b"!<arch>\n",
}


def make_zip(path, files):
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return path


def make_tar_gz(path, files):
    with tarfile.open(path, "w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return path


def archive_bytes(tmp_path, name, files):
    path = os.path.join(str(tmp_path), name)
    if name.endswith(".zip"):
        make_zip(path, files)
    else:
        make_tar_gz(path, files)
    with open(path, "rb") as f:
        data = f.read()
    os.remove(path)
    return data


class FakeDownloader(Downloader):
    """Serves canned bytes per url and records every call."""

    def __init__(self, payloads=None, fail_urls=()):
        self.payloads = payloads or {}
        self.fail_urls = set(fail_urls)
        self.calls = []

    def download(self, url, target):
        self.calls.append((url, target))
        with open(target, "wb") as f:
            f.write(b"partial")
        if url in self.fail_urls or url not in self.payloads:
            raise ProvisionError(ErrorKind.TOOL, f"Downloading {url}: 404")
        with open(target, "wb") as f:
            f.write(self.payloads[url])


class RecordingExtractor(Extractor):
    def __init__(self):
        self.calls = []

    def extract_zip(self, archive, dest):
        self.calls.append(("zip", archive, dest))

    def extract_tar_gz(self, archive, dest):
        self.calls.append(("tar.gz", archive, dest))


@pytest.fixture
def sdl_payloads(tmp_path):
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return {
        SDL.base_url + SDL.dll_file:
            archive_bytes(scratch, SDL.dll_file, SDL_RUNTIME_FILES),
        SDL.base_url + SDL.dev_file:
            archive_bytes(scratch, SDL.dev_file, SDL_DEV_FILES),
    }
