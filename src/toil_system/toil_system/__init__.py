"""TOIL (Time Off In Lieu) engine package.

This package is organized by feature modules (attendance, holidays, toil)
with a thin Flask controller layer over service/repository layers.
"""
