#!/usr/bin/env python3
# coding=utf-8

import glob
import os
import shutil

from win64_resources.util import (
    ErrorKind, ProvisionError, make_dirs, run_tool,
)


MINGW_TRIPLET = "x86_64-w64-mingw32"
DEV_SUBDIRS = ["bin", "include", "lib", "share"]


class Copier:
    def ensure_dir(self, path: str):
        raise NotImplementedError

    def copy_files(self, files, dest: str):
        raise NotImplementedError

    def copy_tree(self, entry: str, dest: str):
        raise NotImplementedError


class ShellCopier(Copier):
    '''
    elevated: run mkdir/cp for the system prefix through sudo
    '''

    def __init__(self, elevated=True):
        self.elevated = elevated

    def _sudo(self, args):
        return ["sudo"] + args if self.elevated else args

    def ensure_dir(self, path):
        if os.path.isdir(path):
            return
        if not self.elevated:
            make_dirs(path)
            return
        run_tool(self._sudo(["mkdir", "-p", "-m", "0777", path]))

    def copy_files(self, files, dest):
        run_tool(["cp", "-f"] + list(files) + [dest], capture=True)

    def copy_tree(self, entry, dest):
        run_tool(self._sudo(["cp", "-r", entry, dest]))


class NativeCopier(Copier):
    def ensure_dir(self, path):
        make_dirs(path)

    def copy_files(self, files, dest):
        if not os.path.isdir(dest):
            raise ProvisionError(ErrorKind.FILESYSTEM,
                                 f"Not a directory [{dest}].")
        try:
            for f in files:
                shutil.copy2(f, dest)
        except OSError as e:
            raise ProvisionError(ErrorKind.TOOL,
                                 f"Copying to {dest}: {e}") from e

    def copy_tree(self, entry, dest):
        target = os.path.join(dest, os.path.basename(entry))
        try:
            _copy_entry(entry, target)
        except OSError as e:
            raise ProvisionError(ErrorKind.TOOL,
                                 f"Copying {entry} to {dest}: {e}") from e


def _copy_entry(src, dst):
    '''
    cp -r semantics: links are copied as links, files and links
    already at dst are replaced, directories are merged
    '''
    if os.path.islink(src):
        if os.path.islink(dst) or os.path.isfile(dst):
            os.remove(dst)
        os.symlink(os.readlink(src), dst)
    elif os.path.isdir(src):
        if os.path.islink(dst) or os.path.isfile(dst):
            os.remove(dst)
        os.makedirs(dst, exist_ok=True)
        for name in sorted(os.listdir(src)):
            _copy_entry(os.path.join(src, name), os.path.join(dst, name))
        shutil.copystat(src, dst)
    else:
        if os.path.islink(dst):
            os.remove(dst)
        shutil.copy2(src, dst)


def place_dlls(workdir, out_dir, copier: Copier):
    print("Copying dlls to output directory...")
    dlls = sorted(glob.glob(os.path.join(glob.escape(workdir), "*.dll")))
    if not dlls:
        raise ProvisionError(ErrorKind.FILESYSTEM,
                             f"No *.dll files found in {workdir}")
    copier.copy_files(dlls, out_dir)
    return dlls


def place_development_subdirs(workdir, expanded_dir_name, prefix,
                              copier: Copier):
    print(f"Placing development files into {prefix} subdirs...")
    dev_root = os.path.join(workdir, expanded_dir_name, MINGW_TRIPLET)
    if not os.path.isdir(dev_root):
        raise ProvisionError(ErrorKind.FILESYSTEM,
                             f"Not found {dev_root}.")

    for subdir in DEV_SUBDIRS:
        destination = os.path.join(prefix, subdir)
        copier.ensure_dir(destination)

        source = os.path.join(dev_root, subdir)
        if not os.path.isdir(source):
            continue
        for name in sorted(os.listdir(source)):
            copier.copy_tree(os.path.join(source, name), destination)
