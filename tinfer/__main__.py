"""Run type inference on the bundled example programs."""

import argparse
import json
import logging
import logging.handlers
import sys
from typing import List, Optional

import tinfer.typecheck
from tinfer.examples import examples
from tinfer.expressions import Expression
from tinfer.logging import JSONFormatter
from tinfer.typecheck import Keying, Substitutions
from tinfer.typecheck.substitutions import SubstitutionEncoder


arg_parser = argparse.ArgumentParser(
    prog='tinfer', description='Infer the types of example programs.'
)
arg_parser.add_argument(
    'examples',
    nargs='*',
    metavar='EXAMPLE',
    help='examples to run (default: all of them)',
)
arg_parser.add_argument(
    '--list',
    action='store_true',
    default=False,
    help='list the available examples and exit',
)
arg_parser.add_argument(
    '--structural',
    action='store_true',
    default=False,
    help=(
        'let structurally identical sub-expressions share one type '
        'placeholder'
    ),
)
arg_parser.add_argument(
    '--json',
    action='store_true',
    default=False,
    help='print one JSON object per example',
)
arg_parser.add_argument(
    '--show-constraints',
    action='store_true',
    default=False,
    help='also print the generated constraints',
)
arg_parser.add_argument(
    '--verbose',
    action='store_true',
    default=False,
    help='print internal logs and errors',
)
arg_parser.add_argument(
    '--log-file',
    default=None,
    help='write JSON logs to this file',
)


def configure_logging(verbose: bool, log_file: Optional[str]) -> None:
    logger = logging.getLogger()
    if verbose:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter('%(levelname)s %(name)s: %(message)s')
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1048576, backupCount=1
        )
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)


def print_types(expression: Expression, subs: Substitutions) -> None:
    print('Types:')
    for node in expression.walk():
        ty = subs.type_of(node)
        if ty is None:
            continue
        suffix = '' if ty.is_concrete else ' (unconstrained)'
        print(f'    {node} : {ty}{suffix}')


def run_example(name: str, args: argparse.Namespace) -> bool:
    expression = examples[name]()
    keying = Keying.BY_STRUCTURE if args.structural else Keying.BY_NODE
    if not args.json:
        print(name)
        print(f'Input: {expression}')
    try:
        constraints = tinfer.typecheck.generate_constraints(
            expression, keying
        )
        if args.show_constraints and not args.json:
            print('Constraints:')
            for constraint in constraints:
                print(f'    {constraint}')
        subs = tinfer.typecheck.unify(constraints)
    except tinfer.typecheck.StaticAnalysisError as e:
        if args.json:
            result = {
                'name': name,
                'input': str(expression),
                'error': {'kind': e.kind.name, 'message': e.message},
            }
            print(json.dumps(result))
        else:
            print(f'Static Analysis Error ({e.kind}):')
            print(e)
            print()
        if args.verbose:
            raise
        return False
    except Exception:
        print('An internal error has occurred.')
        print('This is a bug in tinfer.')
        raise
    if args.json:
        result = {
            'name': name,
            'input': str(expression),
            'substitutions': subs,
        }
        if args.show_constraints:
            result['constraints'] = [str(c) for c in constraints]
        print(json.dumps(result, cls=SubstitutionEncoder))
    else:
        print('Substitutions:')
        for entry in subs:
            print(f'    {entry}')
        print_types(expression, subs)
        print()
    return True


def main(argv: Optional[List[str]] = None) -> None:
    args = arg_parser.parse_args(argv)
    if args.list:
        for name, build in examples.items():
            print(f'{name}: {build()}')
        return
    configure_logging(args.verbose, args.log_file)
    names = args.examples or list(examples)
    for name in names:
        if name not in examples:
            arg_parser.error(f'unknown example {name!r} (see --list)')
    results = [run_example(name, args) for name in names]
    if not all(results):
        sys.exit(1)


if __name__ == '__main__':
    main()
