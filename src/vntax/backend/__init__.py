"""Calculation backend: regime configuration, calculators and services."""
