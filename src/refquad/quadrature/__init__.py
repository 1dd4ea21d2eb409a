"""Quadrature rules on reference elements: one-dimensional families, tables,
tensor-product construction, dispatch by dimension and caching.

"""
