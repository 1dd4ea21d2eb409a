"""Identification of reference elements (vertex, line, simplices, cubes, prisms,
pyramids) by their topological construction.

"""
