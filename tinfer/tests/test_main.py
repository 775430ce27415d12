"""
Test the driver that you would run with `python -m tinfer`.
"""

import json
import os
import subprocess
import sys
import tempfile
import unittest
from typing import List


_project_root = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), '..', '..'
)


def run_tinfer(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, '-m', 'tinfer', *args],
        cwd=_project_root,
        capture_output=True,
        text=True,
        timeout=60,
    )


def json_lines(output: str) -> List[dict]:
    return [json.loads(line) for line in output.splitlines() if line]


class TestMain(unittest.TestCase):
    def test_list(self) -> None:
        result = run_tinfer('--list')
        self.assertEqual(result.returncode, 0)
        self.assertIn('add-two: (lambda(x) x + 2)', result.stdout)

    def test_successful_example(self) -> None:
        result = run_tinfer('apply-add-two')
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertIn('Input: (lambda(x) x + 2)(10)', result.stdout)
        self.assertIn("'x := number", result.stdout)
        self.assertIn('(lambda(x) x + 2)(10) : number', result.stdout)

    def test_failing_example(self) -> None:
        result = run_tinfer('mismatched-branches')
        self.assertEqual(result.returncode, 1)
        self.assertIn(
            'Static Analysis Error (type mismatch):', result.stdout
        )

    def test_unconstrained_example(self) -> None:
        result = run_tinfer('free-variable')
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertIn("y : 'y (unconstrained)", result.stdout)

    def test_show_constraints(self) -> None:
        result = run_tinfer('number', '--show-constraints')
        self.assertIn('Constraints:\n    [42] = number', result.stdout)

    def test_json(self) -> None:
        result = run_tinfer(
            '--json', 'higher-order', 'self-application', 'string'
        )
        self.assertEqual(result.returncode, 1)
        higher_order, self_application, string = json_lines(result.stdout)
        self.assertIn(
            {'var': "'x", 'is': 'number -> number', 'concrete': True},
            higher_order['substitutions'],
        )
        self.assertEqual(self_application['error']['kind'], 'CYCLIC_TYPE')
        self.assertEqual(
            string['error']['kind'], 'UNSUPPORTED_EXPRESSION'
        )

    def test_structural(self) -> None:
        by_node, = json_lines(run_tinfer('--json', 'higher-order').stdout)
        by_structure, = json_lines(
            run_tinfer('--json', '--structural', 'higher-order').stdout
        )
        # The two literal 5s share a placeholder.
        self.assertEqual(
            len(by_structure['substitutions']),
            len(by_node['substitutions']) - 1,
        )

    def test_unknown_example(self) -> None:
        result = run_tinfer('no-such-example')
        self.assertEqual(result.returncode, 2)
        self.assertIn('unknown example', result.stderr)

    def test_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'tinfer.log')
            result = run_tinfer('number', '--log-file', path)
            self.assertEqual(result.returncode, 0, msg=result.stderr)
            with open(path) as f:
                records = json_lines(f.read())
        self.assertTrue(records)
        modules = {record['module'] for record in records}
        self.assertIn('tinfer.typecheck.unify', modules)
