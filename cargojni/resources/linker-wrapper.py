"""
Linker wrapper invoked by cargo for Android targets.

Cargo has no way to pass extra raw link arguments per target, so
``CARGO_TARGET_<TRIPLE>_LINKER`` points at linker-wrapper.sh/.bat, which runs
this script. It re-invokes the NDK clang from ``CARGOJNI_CC`` with
``CARGOJNI_CC_LINK_ARG`` prepended to the arguments cargo passed.

Standalone: only the standard library may be used here.
"""

import os
import shlex
import subprocess
import sys

UNWIND_NDK_MAJOR = 23


def ndk_major_version(environ):
    value = environ.get("CARGO_NDK_MAJOR_VERSION", "")
    return int(value) if value.isdigit() else 0


def rewrite_libgcc(arglist, ndk_major):
    """Replace -lgcc with -lunwind in place.

    libgcc is not shipped starting from NDK r23; older Rust toolchains
    still ask for it.
    """
    if ndk_major < UNWIND_NDK_MAJOR:
        return arglist
    for i, arg in enumerate(arglist):
        if arg.startswith("-lgcc"):
            # Keep whatever follows, including a line ending
            arglist[i] = "-lunwind" + arg[len("-lgcc") :]
    return arglist


def rewrite_response_files(arglist, ndk_major):
    """Apply rewrite_libgcc inside @response files."""
    for arg in arglist:
        if not arg.startswith("@"):
            continue
        path = arg[1:]
        with open(path, "r") as f:
            lines = f.read().splitlines(True)
        rewrite_libgcc(lines, ndk_major)
        with open(path, "w") as f:
            f.write("".join(lines))


def build_command(argv, environ):
    args = [environ["CARGOJNI_CC"], environ["CARGOJNI_CC_LINK_ARG"]] + list(argv)
    ndk_major = ndk_major_version(environ)
    rewrite_libgcc(args, ndk_major)
    rewrite_response_files(args, ndk_major)
    return args


def main(argv=None, environ=None):
    if argv is None:
        argv = sys.argv[1:]
    if environ is None:
        environ = os.environ

    args = build_command(argv, environ)

    # Only visible when the link fails, but that is when it helps
    print(" ".join(shlex.quote(arg) for arg in args))
    return subprocess.call(args)


if __name__ == "__main__":
    sys.exit(main())
