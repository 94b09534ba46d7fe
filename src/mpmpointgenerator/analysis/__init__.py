"""
The ANALYSIS layer holds the numerical core: quadrature rules, element shape
functions and material point generation. It does no file I/O.
"""
