"""Interfaces/abstracciones del Core.

Contratos (Protocol) que implementa el adaptador HTTP; la CLI depende de
ellos y no del cliente concreto.
"""
