"""Tree records domain package.

Tree CRUD itself lives in the managed backend; this package only resolves the
species reference a tree is linked to:
- TreeSpeciesLinker: canonical id or free-text name to canonical species id
"""

from treecatalog.trees.linking import TreeSpeciesLinker, is_canonical_id

__all__ = [
    "TreeSpeciesLinker",
    "is_canonical_id",
]
