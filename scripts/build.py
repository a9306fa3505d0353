"""CLI for building the site from a folder of markdown notes"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from postnotes.config import settings
from postnotes.errors import PostNotesError
from postnotes.ingestion.orchestrator import BuildOrchestrator


def main(
    content_folder: str,
    output_folder: str,
    template_folder: str,
    static_folder: str,
    public_field: str,
) -> int:
    build_settings = settings.model_copy(
        update={
            "content_dir": Path(content_folder),
            "output_dir": Path(output_folder),
            "template_dir": Path(template_folder),
            "static_dir": Path(static_folder),
            "public_field": public_field,
        }
    )
    orchestrator = BuildOrchestrator.from_settings(build_settings)

    try:
        result = orchestrator.build(build_settings.content_dir)
    except PostNotesError as err:
        logger.error(f"Build failed: {err}")
        return 1

    for failure in result.failures:
        logger.warning(f"Skipped {failure.path}: {failure.error}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Build a digital garden from markdown notes")
    parser.add_argument(
        "--content-folder",
        type=str,
        required=False,
        help="Folder containing markdown notes",
        default=str(settings.content_dir),
    )
    parser.add_argument(
        "--output-folder",
        type=str,
        required=False,
        help="Folder the site is written to",
        default=str(settings.output_dir),
    )
    parser.add_argument(
        "--template-folder",
        type=str,
        required=False,
        help="Folder containing the Jinja2 templates",
        default=str(settings.template_dir),
    )
    parser.add_argument(
        "--static-folder",
        type=str,
        required=False,
        help="Folder with static files copied into the output",
        default=str(settings.static_dir),
    )
    parser.add_argument(
        "--public-field",
        type=str,
        required=False,
        help="Front matter key holding the public flag",
        default=settings.public_field,
    )

    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    sys.exit(
        main(
            content_folder=args.content_folder,
            output_folder=args.output_folder,
            template_folder=args.template_folder,
            static_folder=args.static_folder,
            public_field=args.public_field,
        )
    )
