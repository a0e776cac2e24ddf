#!/usr/bin/env python3
# coding=utf-8
# Download the SDL runtime/development archives for the win64 target,
# copy the dlls to out/win64 and the mingw files into the cross prefix.

import argparse
import os
import sys

from win64_resources.catalog import PACKAGES, load_catalog
from win64_resources.provision import MINGW_PREFIX, Settings, provision_all
from win64_resources.util import (
    ProvisionError, print_error, print_success,
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Fetch win64 SDL libraries for cross compilation.")
    parser.add_argument("--root", default=os.getcwd(),
                        help="project root (default: current directory)")
    parser.add_argument("--catalog",
                        help="json file with the packages to fetch")
    parser.add_argument("--prefix", default=MINGW_PREFIX,
                        help=f"cross compiler prefix (default: {MINGW_PREFIX})")
    parser.add_argument("--native", action="store_true",
                        help="use requests/zipfile/tarfile/shutil "
                             "instead of wget/unzip/tar/cp")
    parser.add_argument("--no-sudo", dest="use_sudo", action="store_false",
                        help="do not copy into the prefix through sudo")
    parser.add_argument("--keep-going", action="store_true",
                        help="continue with the next package on failure")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = Settings(
        root=os.path.abspath(args.root),
        prefix=args.prefix,
        native=args.native,
        use_sudo=args.use_sudo,
        keep_going=args.keep_going,
    )

    try:
        packages = load_catalog(args.catalog) if args.catalog else PACKAGES
        summary = provision_all(packages, settings)
    except ProvisionError as e:
        print_error(str(e))
        return 1

    if not summary.ok:
        failed = ", ".join(name for name, _ in summary.failed)
        print_error(f"{len(summary.failed)} package(s) failed: {failed}")
        return 1

    print_success(f"Done: {', '.join(summary.completed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
