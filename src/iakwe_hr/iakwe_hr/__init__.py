"""IAKWE HR package.

Organized by feature modules (leave, employees, users, store) with a thin
Flask controller layer over service/repository layers.
"""
