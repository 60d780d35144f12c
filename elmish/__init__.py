"""elmish — Elm-style components and the list_of combinator."""

__version__ = "0.1.0"
