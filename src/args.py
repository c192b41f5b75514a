"""Argument parsing functionality for fftwprobe."""

import argparse
from constants import Constants


def _add_precision(parser):
    parser.add_argument("-p", "--precision",
                        dest="PRECISION",
                        help="Precisions to consider, packed, e.g. 'fd' (default: fdlq)",
                        action="store", type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="fftwprobe",
        description=(
            "fftwprobe - locate FFTW3 precision variants through pkg-config"
        ),
        add_help=True,
    )

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LEVELS,
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--pkg-config",
                        dest="PKG_CONFIG",
                        help="pkg-config binary to use (default: pkg-config on PATH)",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="action", required=True)

    p_prec = sub.add_parser("precisions", help="List installed precisions")
    _add_precision(p_prec)
    p_prec.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or text, default: text)",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS,
                        default="text")

    p_cflags = sub.add_parser("cflags", help="Print compiler flags")
    _add_precision(p_cflags)

    p_libs = sub.add_parser("libs", help="Print linker flags")
    _add_precision(p_libs)

    p_ver = sub.add_parser("check-version",
                           help="Fail unless every installed precision meets a minimum version")
    p_ver.add_argument("VERSION",
                       help="Minimum version, e.g. v3.3.4 (numeric forms like 3.003004 are accepted)",
                       nargs="?")

    p_ensure = sub.add_parser("ensure",
                              help="Resolve precisions, building from source if none is found")
    _add_precision(p_ensure)
    p_ensure.add_argument("--build-command",
                          dest="BUILD_COMMAND",
                          help="Shell command that builds and installs FFTW3",
                          action="store",
                          type=str)

    return parser.parse_args(argv)
