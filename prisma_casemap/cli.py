import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from prisma_casemap.config_validation import load_config
from prisma_casemap.exceptions import (
    ConfigurationError,
    InputNotFoundError,
    OutputWriteError,
    SchemaParseError,
)
from prisma_casemap.frontend import PrismaFrontend
from prisma_casemap.pipeline import (
    SchemaPipeline,
    find_schema_file,
    load_schema_file,
    write_output,
)

from prisma_casemap.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
)

# Configured after parsing args
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prisma-casemap",
        description=(
            "Rename Prisma models to UpperCamelCase and fields to lowerCamelCase, "
            "keeping the database names through @map/@@map annotations."
        ),
    )
    parser.add_argument(
        "schema_path",
        nargs="?",
        default=None,
        metavar="SCHEMA",
        help="Path to the schema file. Defaults to ./schema.prisma, then ./prisma/schema.prisma.",
    )
    parser.add_argument(
        "--dry",
        action="store_true",
        default=None,
        help="Print output to console instead of writing the schema file.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        help="Write the result to this path instead of over the schema file.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "--no-map-unchanged",
        dest="map_unchanged_names",
        action="store_false",
        default=None,
        help="Only add @map/@@map when the name actually changes.",
    )
    parser.add_argument(
        "--overwrite-maps",
        dest="keep_existing_maps",
        action="store_false",
        default=None,
        help="Replace existing @map/@@map annotations with the original names.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="Number of spaces used to indent block members.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        config = load_config(args.config, args)
        logger.debug(f"Effective configuration: {config}")

        log_progress(logger, "Searching for schema file...")
        schema_file = find_schema_file(config.schema_path, config.search_paths)
        log_highlight(logger, f"Found schema at {schema_file}")
        raw_text = load_schema_file(str(schema_file))

        pipeline = SchemaPipeline(
            frontend=PrismaFrontend(indent=config.indent),
            options=config.transform_options(),
        )
        log_progress(logger, "Renaming models and fields...")
        result = pipeline.process(raw_text)
        summary = result.summary
        log_highlight(
            logger,
            f"Renamed {summary.models_renamed} model(s), {summary.fields_renamed} field(s) "
            f"and {summary.indexes_renamed} index(es); mapped {summary.mappings_added} name(s)",
        )

        if config.dry:
            sys.stdout.write(result.output)
            sys.stdout.flush()
            log_success(logger, "Schema rendered to stdout.")
        else:
            destination = Path(config.output_path) if config.output_path else schema_file
            log_progress(logger, f"Writing schema to {destination}...")
            write_output(result.output, destination)
            log_success(logger, f"Schema written to {destination}.")

    # --- Error Handling ---
    except ConfigurationError as e:
        logger.error(f"Configuration Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except InputNotFoundError as e:
        logger.error(f"Input Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except SchemaParseError as e:
        logger.error(f"Parse Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except OutputWriteError as e:
        logger.error(f"Output Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
