from html import escape
from typing import TYPE_CHECKING

from cinevault.config import PLACEHOLDER_POSTER, MISSING_VALUE

if TYPE_CHECKING:
    from cinevault.domain.models import Movie, Review

# extra card class per genre tag; tags missing here render untagged
CARD_CLASSES = {
    "ACTION": "action-movie",
    "COMEDY": "comedy-movie",
    "DRAMA": "drama-movie",
    "HORROR": "horror-movie",
    "SCI-FI": "scifi-movie",
}


def card_class(genre: str) -> str:
    extra = CARD_CLASSES.get(genre)
    return f"movie-card {extra}" if extra else "movie-card"


def rating_label(rating) -> str:
    return "⭐" * rating if rating else "Not Rated"


def poster_url(poster: str) -> str:
    if not poster or poster == MISSING_VALUE:
        return PLACEHOLDER_POSTER
    return poster


def render_card(movie: "Movie") -> str:
    genre = movie.get_genre()
    return (
        f'<div class="{card_class(genre)}" data-id="{escape(movie.imdb_id)}">'
        f'<img src="{escape(poster_url(movie.poster))}" alt="{escape(movie.title)}" class="movie-poster">'
        f'<div class="movie-info">'
        f'<h3 class="movie-title">{escape(movie.title)}</h3>'
        f'<p class="movie-year">{escape(movie.year)}</p>'
        f'<span class="movie-genre">{escape(genre)}</span>'
        f'<div class="movie-rating">{rating_label(movie.get_user_rating())}</div>'
        f'</div>'
        f'</div>'
    )


def render_review(review: "Review") -> str:
    return (
        f'<div class="review-item">'
        f'<div class="review-date">{review.get_formatted_date()} - {escape(review.author)}</div>'
        f'<div class="review-text">{escape(review.text)}</div>'
        f'</div>'
    )
