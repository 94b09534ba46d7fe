"""
The PRE layer reads mesh files into vertex tables and elements.
"""
