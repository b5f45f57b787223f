from __future__ import annotations


class RecipeError(Exception):
    pass


class InvalidRecipeDocumentError(RecipeError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"Invalid recipe document {source}: {reason}")
        self.source = source
        self.reason = reason


class CatalogError(RecipeError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Catalog index unusable at {path}: {reason}")
        self.path = path
        self.reason = reason


class RecipeNotFoundError(RecipeError, LookupError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id
