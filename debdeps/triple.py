# pyright: strict


def _split(target: str) -> tuple[str, str]:
    """Return the (arch, abi) components of a compilation target.

    The arch is the first dash separated component and the abi the last,
    so "armv7-unknown-linux-gnueabihf" becomes ("armv7", "gnueabihf").
    """
    parts = target.split("-")
    return parts[0], parts[-1] if len(parts) > 1 else ""


def debian_triple(target: str) -> str:
    """Map a compilation target to the multiarch triple Debian uses
    for its library directories, e.g. /usr/lib/aarch64-linux-gnu"""
    arch, abi = _split(target)
    if arch in ("i586", "i686"):
        arch, abi = "i386", "gnu"
    elif arch in ("x86_64", "aarch64", "mipsel"):
        abi = "gnu"
    elif arch.startswith("arm") or arch.startswith("thumb"):
        arch, abi = "arm", "gnueabihf" if abi.endswith("hf") else "gnueabi"
    elif arch.startswith("riscv64"):
        arch, abi = "riscv64", "gnu"
    return f"{arch}-linux-{abi}"


_ARCHITECTURES: dict[tuple[str, str], str] = {
    ("mips64", "gnuabin32"): "mipsn32",
    ("mips64el", "gnuabin32"): "mipsn32el",
    ("mipsisa64r6", "gnuabi64"): "mips64r6",
    ("mipsisa64r6", "gnuabin32"): "mipsn32r6",
    ("mipsisa64r6el", "gnuabi64"): "mips64r6el",
    ("mipsisa64r6el", "gnuabin32"): "mipsn32r6el",
    ("powerpc", "gnuspe"): "powerpcspe",
    ("x86_64", "gnux32"): "x32",
}

_ARCHITECTURES_ANY_ABI: dict[str, str] = {
    "aarch64": "arm64",
    "mipsisa32r6": "mipsr6",
    "mipsisa32r6el": "mipsr6el",
    "powerpc64": "ppc64",
    "powerpc64le": "ppc64el",
    "riscv64gc": "riscv64",
    "i586": "i386",
    "i686": "i386",
    "x86": "i386",
    "x86_64": "amd64",
}


def debian_architecture(target: str) -> str:
    """Map a compilation target to a Debian architecture name such as amd64"""
    arch, abi = _split(target)
    if (arch, abi) in _ARCHITECTURES:
        return _ARCHITECTURES[(arch, abi)]
    if arch in _ARCHITECTURES_ANY_ABI:
        return _ARCHITECTURES_ANY_ABI[arch]
    if arch.startswith("arm"):
        return "armhf" if abi.endswith("hf") else "armel"
    return arch
