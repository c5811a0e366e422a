"""
ecmfactor command line.

Factors each number given on the command line with the settings from
ecmfactor.yaml (plus ecmfactor.local.yaml), overridden by the flags.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .arg_parser import create_parser
from .errors import InvalidInputError
from .factor_list import unresolved
from .factorisation import factorise_with
from .typed_config import AppConfig, LoggingConfig, TypedConfigLoader
from .user_output import UserOutput

DEFAULT_CONFIG = 'ecmfactor.yaml'

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_INCOMPLETE = 2


def load_config(config_path: Optional[str]) -> AppConfig:
    """
    Load the configuration file, or defaults if none is given and
    ecmfactor.yaml does not exist in the working directory.
    """
    loader = TypedConfigLoader()
    if config_path is None:
        if not Path(DEFAULT_CONFIG).exists():
            return AppConfig()
        config_path = DEFAULT_CONFIG
    return loader.load(config_path)


def setup_logging(logging_config: LoggingConfig, verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else getattr(logging, logging_config.level, logging.WARNING)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file:
        logging_config.ensure_log_dir_exists()
        handlers.insert(0, logging.FileHandler(logging_config.file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ecmfactor command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        parser.error(str(e))

    setup_logging(config.logging, verbose=args.verbose)
    logger = logging.getLogger(__name__)
    output = UserOutput(quiet=args.quiet, logger=logger)

    settings = config.factorisation
    digits = args.digits or settings.digits
    max_digits = args.max_digits or settings.max_digits
    seed = args.seed if args.seed is not None else settings.seed
    method = 'step' if args.step else settings.method
    if args.verbose:
        output.info(
            f"Search settings: small_factor_bound={settings.small_factor_bound}, "
            f"prime_bound={settings.prime_bound}, digits={digits}, "
            f"max_digits={max(max_digits, digits)}, method={method}"
        )

    status = EXIT_OK
    for n in args.numbers:
        try:
            factors = factorise_with(
                n,
                small_factor_bound=settings.small_factor_bound,
                prime_bound=settings.prime_bound,
                digits=digits,
                digits_step=settings.digits_step,
                max_digits=max(max_digits, digits),
                seed=seed,
                method=method,
            )
        except InvalidInputError as e:
            output.error(str(e))
            status = max(status, EXIT_INVALID)
            continue

        output.result(n, factors)
        residues = unresolved(factors)
        if residues:
            output.warning(
                f"{len(residues)} composite factor(s) of {n} left unresolved: "
                + ", ".join(str(r.value) for r in residues)
            )
            if args.strict:
                status = EXIT_INCOMPLETE

    return status


if __name__ == '__main__':
    sys.exit(main())
