import logging
import os
from typing import Optional, Union

import sh  # type: ignore

from debdeps import triple, workspace
from debdeps.errors import CommandError, CommandFailed, DependencySpecNotFound

LOG = logging.getLogger(__name__)

DPKG_SHLIBDEPS_COMMAND = "dpkg-shlibdeps"
DEPENDS_TAG = b"shlibs:Depends="
# libgcc is guaranteed by the LSB to always be present
SUPPRESSED_PREFIXES = ("libgcc-", "libgcc1")
# str.strip() would also remove unicode whitespace
ASCII_WHITESPACE = " \t\n\x0c\r"

StrPath = Union[str, "os.PathLike[str]"]


def build_arguments(path: StrPath, arch_triple: Optional[str] = None) -> list[str]:
    """Build the argument list for dpkg-shlibdeps.

    -O prints the substitution variables to stdout rather than
    writing debian/substvars.
    """
    args = ["-O"]
    if arch_triple:
        args.append(f"-l/usr/lib/{arch_triple}")
    args.append(os.fspath(path))
    return args


def run(path: StrPath, cwd: str, arch_triple: Optional[str] = None) -> bytes:
    """Run dpkg-shlibdeps on a binary and return its raw stdout

    Args:
        path: the binary to analyze
        cwd: the directory to run in, must contain debian/control
        arch_triple: the multiarch triple of the library search path, if any
    """
    display_path = os.fspath(path)
    try:
        command = sh.Command(DPKG_SHLIBDEPS_COMMAND)
        result = command(
            *build_arguments(path, arch_triple),
            _cwd=cwd,
            _tty_out=False,
            _return_cmd=True,
        )
    except (sh.CommandNotFound, sh.ForkException, OSError) as e:
        raise CommandFailed(DPKG_SHLIBDEPS_COMMAND, e) from e
    except sh.ErrorReturnCode as e:
        raise CommandError(DPKG_SHLIBDEPS_COMMAND, display_path, e.stderr) from e

    stdout: bytes = result.stdout
    LOG.debug(
        f"{DPKG_SHLIBDEPS_COMMAND} for {display_path}: "
        f"{stdout.decode('utf-8', errors='replace')}"
    )
    return stdout


def parse_depends(output: bytes) -> list[str]:
    """Extract the dependency specifiers from the shlibs:Depends= line.

    Tokens that are not valid UTF-8 are dropped rather than failing
    the whole resolution.
    """
    line = next(
        (line for line in output.split(b"\n") if line.startswith(DEPENDS_TAG)), None
    )
    if line is None:
        raise DependencySpecNotFound()

    deps: list[str] = []
    for token in line[len(DEPENDS_TAG) :].split(b","):
        try:
            dep = token.decode("utf-8")
        except UnicodeDecodeError:
            continue
        dep = dep.strip(ASCII_WHITESPACE)
        if dep.startswith(SUPPRESSED_PREFIXES):
            continue
        deps.append(dep)
    return deps


def resolve(path: StrPath, target: Optional[str] = None) -> list[str]:
    """Resolve the Debian packages a binary needs at runtime.

    Args:
        path: the binary to analyze
        target: the compilation target the binary was built for,
            e.g. aarch64-unknown-linux-gnu. Omit for the host.

    Returns:
        the dependency specifiers in the order dpkg-shlibdeps printed them
    """
    arch_triple = triple.debian_triple(target) if target else None
    with workspace.provision() as root:
        output = run(path, root, arch_triple)
    return parse_depends(output)
