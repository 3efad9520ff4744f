from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("debdeps")
except PackageNotFoundError:
    pass
