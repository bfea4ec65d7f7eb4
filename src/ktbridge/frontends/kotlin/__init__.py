"""
Kotlin Frontend.

Structural scanning of Kotlin source into declaration records.
"""

from ktbridge.frontends.kotlin.scanner import KotlinScanner, parse_parameters, parse_properties

__all__ = ["KotlinScanner", "parse_parameters", "parse_properties"]
