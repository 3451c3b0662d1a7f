"""Stress Police work-block scheduler."""
