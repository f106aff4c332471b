"""Describes the RecipeBox domain. Centres around the `CollectionStore`.

What is there to it?

- Two personal collections, the library and the favorites. Same shape,
  different key, so one store class instantiated twice.
- The collections sit in a dumb key-value store. Whole list in, whole list out.
- Recipes themselves come from TheMealDB. We only ever keep a summary.
- Storage failing should never take the page down. Worst case a collection
  looks empty and the button says it could not save.

The only real invariant is no duplicate ids within a collection.
"""
