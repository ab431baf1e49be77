import argparse
import logging
import sys
from typing import Optional

from collage_tools import Project
from collage_tools.exceptions import Error
from collage_tools.session import Session
from collage_tools.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="collage-tools command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the interactive command loop")
    run_parser.add_argument(
        "script",
        nargs="?",
        help="File of commands to run instead of standard input",
    )

    export_parser = subparsers.add_parser(
        "export", help="Render a collage project to an image"
    )
    export_parser.add_argument("input_file", help="Input collage file")
    export_parser.add_argument("output_file", help="Output image file")
    export_parser.add_argument(
        "-f",
        "--format",
        help="Output format, e.g. ppm or png. Default is the output suffix.",
    )

    show_parser = subparsers.add_parser("show", help="Show the layers of a project")
    show_parser.add_argument("input_file", help="Input collage file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("collage_tools")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    if args.command == "run":
        if args.script:
            with open(args.script, encoding="utf-8") as f:
                Session(f).run()
        else:
            Session(sys.stdin).run()

    elif args.command == "export":
        try:
            project = Project.open(args.input_file)
            project.save_image(args.output_file, args.format)
        except (Error, ValueError) as e:
            logger.error(str(e))
            return 1

    elif args.command == "show":
        try:
            project = Project.open(args.input_file)
        except Error as e:
            logger.error(str(e))
            return 1
        print(project)
        for index, layer in enumerate(project):
            print("%d: %r" % (index, layer))

    return None


if __name__ == "__main__":
    sys.exit(main())
