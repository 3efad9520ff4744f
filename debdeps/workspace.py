import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator

LOG = logging.getLogger(__name__)

CONTROL_FILE = os.path.join("debian", "control")


@contextmanager
def provision() -> Iterator[str]:
    """Create a scratch directory laid out the way dpkg-shlibdeps expects.

    dpkg-shlibdeps insists on a (possibly empty) debian/control file relative
    to its working directory even though its contents don't matter here.
    The directory is removed once the context exits.

    Yields:
        the path to the root of the scratch directory
    """
    with tempfile.TemporaryDirectory(prefix="debdeps-") as root:
        os.makedirs(os.path.join(root, "debian"))
        control_path = os.path.join(root, CONTROL_FILE)
        try:
            open(control_path, "w").close()
        except OSError as e:
            # dpkg-shlibdeps usually copes without it
            LOG.debug(f"Could not create {control_path}: {e}")
        yield root
