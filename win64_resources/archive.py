#!/usr/bin/env python3
# coding=utf-8

import os
import tarfile
import zipfile

from win64_resources.util import (
    ErrorKind, ProvisionError, rm_rf, run_tool,
)


class Extractor:
    def extract_zip(self, archive: str, dest: str):
        raise NotImplementedError

    def extract_tar_gz(self, archive: str, dest: str):
        raise NotImplementedError


class ShellExtractor(Extractor):
    def extract_zip(self, archive, dest):
        run_tool(["unzip", "-o", "-q", archive, "-d", dest])

    def extract_tar_gz(self, archive, dest):
        run_tool(["tar", "-xzf", archive, "-C", dest])


class NativeExtractor(Extractor):
    def extract_zip(self, archive, dest):
        try:
            with zipfile.ZipFile(archive, 'r') as zip_ref:
                zip_ref.extractall(path=dest)
        except zipfile.BadZipFile as e:
            raise ProvisionError(ErrorKind.ARCHIVE,
                                 f"Invalid zip file {archive}: {e}") from e

    def extract_tar_gz(self, archive, dest):
        try:
            with tarfile.open(archive, 'r:gz') as tar:
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(path=dest, filter="data")
                else:
                    tar.extractall(path=dest)
        except tarfile.TarError as e:
            raise ProvisionError(ErrorKind.ARCHIVE,
                                 f"Invalid tar file {archive}: {e}") from e


def expand_archive(workdir, file_name, expanded_dir_name,
                   extractor: Extractor):
    '''
    .zip    -> extract over whatever is already in workdir
    .tar.gz -> drop workdir/expanded_dir_name first, then extract
    '''
    archive = os.path.join(workdir, file_name)
    if file_name.endswith(".zip"):
        print(f"[Expanding]: {archive}")
        extractor.extract_zip(archive, workdir)
    elif file_name.endswith(".tar.gz"):
        print(f"[Expanding]: {archive}")
        expanded = os.path.join(workdir, expanded_dir_name)
        if os.path.lexists(expanded):
            try:
                rm_rf(expanded)
            except OSError as e:
                raise ProvisionError(ErrorKind.FILESYSTEM,
                                     f"Removing {expanded}: {e}") from e
        extractor.extract_tar_gz(archive, workdir)
    else:
        raise ProvisionError(
            ErrorKind.ARCHIVE,
            f"Don't know how to expand archive {file_name}: "
            "unknown archive type")
