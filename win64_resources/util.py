#!/usr/bin/env python3
# coding=utf-8

import enum
import os
import shutil
import subprocess
import sys


RED = '\033[91m'
GREEN = '\033[92m'
CYAN = '\033[96m'
YELLOW = '\033[93m'
RESET = '\033[0m'


def print_error(message: str):
    sys.stderr.write(f"{RED}Error: {message}{RESET}\n")
    sys.stderr.flush()


def print_warning(message: str):
    print(f"{YELLOW}Warning: {message}{RESET}")


def print_success(message: str):
    print(f"{GREEN}{message}{RESET}")


def print_info(message: str):
    print(f"{CYAN}{message}{RESET}")


class ErrorKind(enum.Enum):
    FILESYSTEM = "filesystem"
    URL = "url"
    TOOL = "tool"
    ARCHIVE = "archive"
    CONFIG = "config"


class ProvisionError(RuntimeError):
    '''
    Raised by every provisioning step; the kind tells the caller
    which stage failed.
    '''

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __str__(self):
        return f"[{self.kind.value}] {self.args[0]}"


def make_dirs(path):
    '''
    mkdir -p with world-writable/traversable permissions (umask applies)
    '''
    try:
        os.makedirs(path, mode=0o777, exist_ok=True)
    except OSError as e:
        raise ProvisionError(
            ErrorKind.FILESYSTEM,
            f"Creating directory structure {path}: {e}") from e
    return path


def rm_rf(file_path):
    if os.path.islink(file_path) or os.path.isfile(file_path):
        os.remove(file_path)
    elif os.path.isdir(file_path):
        shutil.rmtree(file_path)
    return True


def run_tool(args, capture=False):
    '''
    Run an external tool and wait for it.
    capture: collect stdout/stderr and show them only on failure
    '''
    cmd = " ".join(str(a) for a in args)
    print(f"[do subprocess]: {cmd}")

    try:
        if capture:
            ret = subprocess.run(args, stdout=subprocess.PIPE,
                                 stderr=subprocess.STDOUT)
        else:
            ret = subprocess.run(args)
    except OSError as e:
        raise ProvisionError(ErrorKind.TOOL, f"{cmd}: {e}") from e

    if ret.returncode != 0:
        if capture and ret.stdout:
            print(ret.stdout.decode("utf-8", errors="replace"))
        raise ProvisionError(
            ErrorKind.TOOL,
            f"{cmd}: exit status {ret.returncode}")
    return ret.returncode
