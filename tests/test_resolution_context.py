"""
Resolution Context Tests

Tests for the resolution chain used in recursion error messages
"""

import sys
import os
import unittest
import asyncio

# Add tests directory to path for local imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from autowire.resolution_context import _resolution_context, current_path, resolving

from conftest import AutowireTestCase
from fixtures import Database, UserRepository


class TestResolving(AutowireTestCase):
    """Tests for the resolving() context manager"""

    def test_no_path_outside_resolution(self):
        self.assertIsNone(current_path())

    def test_nested_identifiers(self):
        """Classes and dotted names are rendered, variables prefixed with $"""
        with resolving(UserRepository):
            with resolving("fixtures.Database"):
                with resolving("dsn", variable=True):
                    self.assertEqual(
                        current_path(),
                        "UserRepository -> fixtures.Database -> $dsn"
                    )
                self.assertEqual(current_path(), "UserRepository -> fixtures.Database")

    def test_outermost_block_clears_context(self):
        with resolving(Database) as ctx:
            self.assertIs(_resolution_context.get(), ctx)

        self.assertIsNone(_resolution_context.get())

    def test_cleared_on_exception(self):
        with self.assertRaises(RuntimeError):
            with resolving(Database):
                with resolving(UserRepository):
                    raise RuntimeError("failure")

        self.assertIsNone(_resolution_context.get())

    def test_tasks_have_separate_chains(self):
        """Each asyncio task resolves with its own chain"""
        async def resolve(identifier, started, release):
            with resolving(identifier):
                started.set()
                await release.wait()
                return current_path()

        async def main():
            first_started, second_started = asyncio.Event(), asyncio.Event()
            release = asyncio.Event()
            first = asyncio.create_task(resolve(Database, first_started, release))
            second = asyncio.create_task(resolve(UserRepository, second_started, release))
            await first_started.wait()
            await second_started.wait()
            release.set()
            return await first, await second

        self.assertEqual(asyncio.run(main()), ("Database", "UserRepository"))


if __name__ == '__main__':
    unittest.main()
