"""Use-case layer for round and persistence workflows.

Each module runs one engine or storage operation and converts failures into
:class:`whack.domain.ports.UseCaseError` so presenters can show them as-is.
"""
