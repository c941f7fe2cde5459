"""
Command-line interface for the tuning client.

Examples::

    tuning-client list --tuned
    tuning-client create models/base-1 train.jsonl --epochs 5 --wait
    tuning-client update tunedModels/my-model display_name='"New name"'
    tuning-client delete tunedModels/my-model
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from .config import load_config
from .core.exceptions import TuningClientError
from .services import ModelService
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """Parse ``path=value`` pairs; values are JSON when they parse as JSON."""
    updates: Dict[str, Any] = {}
    for assignment in assignments:
        path, sep, raw = assignment.partition('=')
        if not sep or not path:
            raise argparse.ArgumentTypeError(f"Expected PATH=VALUE, got: {assignment!r}")
        try:
            updates[path] = json.loads(raw)
        except json.JSONDecodeError:
            updates[path] = raw
    return updates


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='tuning-client',
        description="Manage base and tuned models on a remote tuning service",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--config', type=Path, help='YAML or JSON configuration file')
    parser.add_argument('--api-key', help='API key (overrides configuration)')
    parser.add_argument('--log-level', help='Logging level (overrides configuration)')

    subparsers = parser.add_subparsers(dest='command', help='Command')

    list_parser = subparsers.add_parser('list', help='List base or tuned models')
    list_parser.add_argument('--tuned', action='store_true', help='List tuned models')
    list_parser.add_argument('--page-size', type=int, help='Models per page')
    list_parser.add_argument('--limit', type=int, help='Stop after this many models')

    get_parser = subparsers.add_parser('get', help='Show a base or tuned model')
    get_parser.add_argument('name', help='models/... or tunedModels/...')

    create_parser_ = subparsers.add_parser('create', help='Start tuning a model')
    create_parser_.add_argument('source', help='Source model name')
    create_parser_.add_argument('training_data', type=Path, help='JSON, JSONL or CSV training data')
    create_parser_.add_argument('--id', help='Tuned model id')
    create_parser_.add_argument('--display-name', help='Display name')
    create_parser_.add_argument('--description', help='Description')
    create_parser_.add_argument('--epochs', type=int, help='Number of training epochs')
    create_parser_.add_argument('--batch-size', type=int, help='Training batch size')
    create_parser_.add_argument('--learning-rate', type=float, help='Learning rate')
    create_parser_.add_argument('--input-key', default='text_input', help='Input field name')
    create_parser_.add_argument('--output-key', default='output', help='Output field name')
    create_parser_.add_argument('--wait', action='store_true', help='Block until tuning finishes')

    update_parser = subparsers.add_parser('update', help='Update fields of a tuned model')
    update_parser.add_argument('name', help='tunedModels/...')
    update_parser.add_argument('assignments', nargs='+', metavar='PATH=VALUE',
                               help='Dotted field path and JSON value')

    delete_parser = subparsers.add_parser('delete', help='Delete a tuned model')
    delete_parser.add_argument('name', help='tunedModels/...')

    wait_parser = subparsers.add_parser('wait', help='Wait for an operation to finish')
    wait_parser.add_argument('operation', help='Operation name')

    return parser


def run(args: argparse.Namespace, service: ModelService) -> int:
    """Execute a parsed command against ``service``."""
    if args.command == 'list':
        models = service.list_tuned_models(args.page_size) if args.tuned else service.list_models(args.page_size)
        for count, model in enumerate(models, start=1):
            _emit(model.to_dict())
            if args.limit and count >= args.limit:
                break
    elif args.command == 'get':
        _emit(service.get_model(args.name).to_dict())
    elif args.command == 'create':
        operation = service.create_tuned_model(
            args.source,
            args.training_data,
            id=args.id,
            display_name=args.display_name,
            description=args.description,
            epoch_count=args.epochs,
            batch_size=args.batch_size,
            learning_rate=args.learning_rate,
            input_key=args.input_key,
            output_key=args.output_key,
        )
        if args.wait:
            _emit(operation.result().to_dict())
        else:
            _emit(operation.operation.to_dict())
    elif args.command == 'update':
        _emit(service.update_tuned_model(args.name, _parse_assignments(args.assignments)).to_dict())
    elif args.command == 'delete':
        service.delete_tuned_model(args.name)
    elif args.command == 'wait':
        _emit(service.poller.wait_for_completion({'name': args.operation}).to_dict())
    else:
        logger.error(f"Unknown command: {args.command}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None, service: Optional[ModelService] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config, api_key=args.api_key, log_level=args.log_level)
        setup_logging(log_level=config.log_level, log_format='minimal')

        if service is not None:
            return run(args, service)

        from .adapters import RestModelServiceClient, RestOperationsClient
        model_client = RestModelServiceClient.from_config(config)
        operations_client = RestOperationsClient.from_config(config)
        try:
            return run(args, ModelService(model_client, operations_client, config))
        finally:
            model_client.close()
            operations_client.close()

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (TuningClientError, argparse.ArgumentTypeError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
