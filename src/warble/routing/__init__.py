"""Routing — path templates, route declarations and route multiplication.

Routes are declared during setup and multiplied once per locale into
the concrete route table.
"""
