"""Test-suite for qwzlab."""
