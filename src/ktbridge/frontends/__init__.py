"""
Source frontends. Each frontend turns source text into declaration records.
"""
