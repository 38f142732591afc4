"""
Inflector backed by the ``inflection`` library.
"""

import inflection

from ..core.interfaces.inflector import IInflector


class InflectionInflector(IInflector):
    """English pluralization using inflection's rule tables.

    Pluralization is a heuristic: irregular and uncountable words are only
    as good as inflection's built-in tables.
    """

    def pluralize(self, word: str) -> str:
        return inflection.pluralize(word)
