"""Built-in motivational quote provider."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from .models import Quote

DEFAULT_QUOTES: tuple[Quote, ...] = (
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("It always seems impossible until it's done.", "Nelson Mandela"),
    Quote("Well done is better than well said.", "Benjamin Franklin"),
    Quote("Action is the foundational key to all success.", "Pablo Picasso"),
    Quote("Focus on being productive instead of busy.", "Tim Ferriss"),
    Quote("You don't have to see the whole staircase, just take the first step.", "Martin Luther King Jr."),
    Quote("Concentrate all your thoughts upon the work at hand.", "Alexander Graham Bell"),
    Quote("Small deeds done are better than great deeds planned.", "Peter Marshall"),
)


class RandomQuoteProvider:
    """Draws quotes uniformly at random from a fixed collection."""

    def __init__(
        self,
        quotes: Sequence[Quote] = DEFAULT_QUOTES,
        *,
        rng: Optional[random.Random] = None,
    ):
        if not quotes:
            raise ValueError("quotes must not be empty")
        self._quotes = tuple(quotes)
        self._rng = rng or random.Random()

    def draw_random_quote(self) -> Quote:
        return self._rng.choice(self._quotes)
