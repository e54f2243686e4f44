"""Routing — route table and URL generation.

Routes are registered during setup and frozen with ``compile()``;
generation fills their path templates from parameters or names.
"""
