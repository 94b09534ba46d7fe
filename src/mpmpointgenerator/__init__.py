"""
Material point generator for particle-based (MPM) simulations.

Reads a legacy ASCII finite-element mesh and seeds material points at the Gauss
points of its elements.
"""
