"""Test doubles shared by the scenario tests."""
