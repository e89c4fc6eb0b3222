"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos de los recursos remotos (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo la forma de los recursos.
"""
