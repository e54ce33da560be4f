"""Registro de Ponto package.

Organized by feature modules (users, punches, reports) with a thin Flask
controller layer over service/repository layers.
"""
