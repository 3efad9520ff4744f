import argparse
import json
import logging
import os
import os.path
import sys
from dataclasses import dataclass, field
from functools import reduce
from typing import Optional, TextIO

import lief

from debdeps import shlibdeps, triple
from debdeps.errors import ResolveError

LOG = logging.getLogger(__name__)

FORMATS = ("lines", "depends", "json")


@dataclass
class ProgramArguments:
    filenames: list[str] = field(default_factory=list)
    target: Optional[str] = None
    format: str = "lines"
    verbose: bool = False


def expand_filenames(paths: list[str]) -> list[str]:
    """Explode directories into the files beneath them and keep only files"""
    filenames: list[str] = reduce(
        lambda a, b: a + b,
        map(
            lambda dir: (
                [
                    os.path.join(root, file)
                    for root, _, files in os.walk(dir)
                    for file in sorted(files)
                ]
                if os.path.isdir(dir)
                else [dir]
            ),
            paths,
        ),
        [],
    )
    return [f for f in filenames if os.path.isfile(f)]


def write_result(
    results: dict[str, list[str]], format: str, stdout: TextIO = sys.stdout
) -> None:
    if format == "json":
        json.dump(results, stdout, indent=2)
        stdout.write("\n")
        return
    for filename, deps in results.items():
        if len(results) > 1:
            stdout.write(f"# {filename}\n")
        if format == "depends":
            stdout.write(f"Depends: {', '.join(deps)}\n")
        else:
            for dep in deps:
                stdout.write(f"{dep}\n")


def start(args: list[str] = sys.argv[1:], stdout: TextIO = sys.stdout) -> None:
    """
    Start the main CLI

    Args:
        args: the command line arguments to parse
        stdout: where to write the resolved dependencies
    """
    parser = argparse.ArgumentParser(
        prog="debdeps",
        description="Resolve the Debian packages a binary needs at runtime",
    )
    parser.add_argument(
        "filenames", nargs="+", metavar="FILE", help="The ELF file to analyze"
    )
    parser.add_argument(
        "-t",
        "--target",
        help="""The compilation target the binaries were built for,
            e.g. aarch64-unknown-linux-gnu. Defaults to the host.""",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="lines",
        help="How to print the dependencies",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the raw dpkg-shlibdeps output",
    )

    program_args: ProgramArguments = parser.parse_args(
        args, namespace=ProgramArguments()
    )

    # Setup the logging config
    logging.basicConfig(
        level=logging.DEBUG if program_args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s [%(filename)s:%(lineno)d] %(message)s",
    )

    filenames = expand_filenames(program_args.filenames)
    elf_filenames: list[str] = []
    for filename in filenames:
        if lief.is_elf(filename):
            elf_filenames.append(filename)
        else:
            LOG.warning(f"Skipping {filename}, it is not an ELF file")

    # If none of the inputs are valid files, simply return
    if len(elf_filenames) == 0:
        sys.exit("No valid ELF files were provided")

    if program_args.target:
        LOG.info(
            f"Resolving for {program_args.target} "
            f"({triple.debian_architecture(program_args.target)})"
        )

    results: dict[str, list[str]] = {}
    for filename in elf_filenames:
        try:
            results[filename] = shlibdeps.resolve(filename, program_args.target)
        except ResolveError as e:
            sys.exit(str(e))

    write_result(results, program_args.format, stdout)
