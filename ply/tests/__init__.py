"""Tests for Ply."""
