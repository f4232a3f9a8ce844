"""Test suite for the wildfire lattice."""
