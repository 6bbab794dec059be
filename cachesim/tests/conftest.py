"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `cachesim`
package and the `run` entry point without needing PYTHONPATH set externally.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (cachesim/tests -> cachesim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def write_trace(tmp_path):
    """Return a helper that writes trace lines to a file and returns its path."""
    def _write(lines, name='trace.txt'):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding='utf-8')
        return str(path)
    return _write
