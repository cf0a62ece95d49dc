import pytest
from datetime import datetime
from pydantic import ValidationError

from cinevault.domain.models import Genre, GenreFlavor, Movie, Review


@pytest.fixture
def movie():
    """Create an unrated general movie."""
    return Movie(
        title="Inception",
        year="2010",
        director="Christopher Nolan",
        plot="A thief who steals corporate secrets through dream-sharing technology.",
        poster="https://example.com/inception.jpg",
        imdb_rating=8.8,
        runtime="148 min",
        actors="Leonardo DiCaprio, Joseph Gordon-Levitt",
        imdb_id="tt1375666"
    )


def test_new_movie_is_unrated(movie):
    """Test that a new movie starts without a user rating."""
    assert movie.get_user_rating() is None
    assert movie.is_rated() is False
    assert movie.get_reviews() == ()
    assert isinstance(movie.get_created_at(), datetime)


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_set_user_rating_in_range(movie, rating):
    """Test that every rating between 1 and 5 is accepted."""
    assert movie.set_user_rating(rating) is True
    assert movie.get_user_rating() == rating


@pytest.mark.parametrize("rating", [0, 6, -1, 100, 3.5, "4", None, True])
def test_set_user_rating_out_of_range_keeps_previous(movie, rating):
    """Test that invalid ratings are rejected and the prior value is kept."""
    movie.set_user_rating(3)

    assert movie.set_user_rating(rating) is False
    assert movie.get_user_rating() == 3


def test_set_user_rating_invalid_is_logged(movie, caplog):
    """Test that a rejected rating is reported in the log."""
    with caplog.at_level("WARNING"):
        movie.set_user_rating(9)
    assert "must be between 1 and 5" in caplog.text


def test_add_review_preserves_order(movie):
    """Test that reviews keep their insertion order and duplicates are allowed."""
    first = Review("Ada", "Loved it", 5)
    second = Review("Ada", "Loved it", 5)
    movie.add_review(first)
    movie.add_review(second)

    assert movie.get_reviews() == (first, second)


def test_get_reviews_does_not_expose_internal_list(movie):
    """Test that callers cannot mutate the review sequence through the accessor."""
    movie.add_review(Review("Ada", "Good", 4))
    reviews = movie.get_reviews()

    assert isinstance(reviews, tuple)
    assert len(movie.get_reviews()) == 1


def test_default_genre_is_general(movie):
    """Test that a movie without a genre tag reports General and carries no flavor."""
    assert movie.genre == Genre.GENERAL
    assert movie.get_genre() == "General"
    assert movie.get_flavor() is None
    assert movie.set_flavor_level(5) is False
    assert movie.add_stunt("car chase") is False


def test_get_info_snapshot(movie):
    """Test that get_info returns every field plus genre and reviews."""
    movie.set_user_rating(4)
    movie.add_review(Review("Ada", "Mind bending", 4, created_at=datetime(2026, 1, 2)))

    info = movie.get_info()

    assert info.title == "Inception"
    assert info.year == "2010"
    assert info.director == "Christopher Nolan"
    assert info.imdb_rating == 8.8
    assert info.runtime == "148 min"
    assert info.imdb_id == "tt1375666"
    assert info.user_rating == 4
    assert info.genre == "General"
    assert info.date_added == movie.get_created_at()
    assert len(info.reviews) == 1
    assert info.reviews[0].text == "Mind bending"


def test_get_info_is_immutable(movie):
    """Test that the snapshot cannot be changed and does not touch the movie."""
    info = movie.get_info()
    with pytest.raises(ValidationError):
        info.title = "Something else"
    assert movie.title == "Inception"


def test_get_info_unrated_is_zero(movie):
    """Test that an unrated movie is exported with rating 0."""
    assert movie.get_info().user_rating == 0


def test_created_at_is_kept():
    """Test that an explicit creation timestamp is used as given."""
    created = datetime(2020, 5, 17, 12, 0)
    movie = Movie("Alien", "1979", "Ridley Scott", "", "", 8.5, "117 min", "", "tt0078748",
                  genre=Genre.HORROR, created_at=created)
    assert movie.get_created_at() == created


@pytest.mark.parametrize("genre, attribute", [
    (Genre.COMEDY, "laugh_meter"),
    (Genre.DRAMA, "emotional_impact"),
    (Genre.HORROR, "scare_level"),
    (Genre.SCI_FI, "tech_level"),
])
def test_level_flavor_is_clamped(genre, attribute):
    """Test that numeric genre flavors are clamped to 0-10."""
    movie = Movie("T", "2000", "", "", "", None, "", "", "tt1", genre=genre)
    flavor = movie.get_flavor()

    assert flavor.name == attribute
    assert flavor.value == 0

    assert movie.set_flavor_level(7) is True
    assert flavor.value == 7

    movie.set_flavor_level(42)
    assert flavor.value == 10

    movie.set_flavor_level(-3)
    assert flavor.value == 0


def test_level_flavor_rejects_non_numeric():
    """Test that a non-numeric level is ignored."""
    movie = Movie("T", "2000", "", "", "", None, "", "", "tt1", genre=Genre.HORROR)
    movie.set_flavor_level(4)

    assert movie.set_flavor_level("scary") is False
    assert movie.get_flavor().value == 4


def test_action_flavor_collects_stunts():
    """Test that action movies carry a stunt list instead of a level."""
    movie = Movie("T", "2000", "", "", "", None, "", "", "tt1", genre=Genre.ACTION)

    assert movie.add_stunt("car chase") is True
    assert movie.add_stunt("helicopter jump") is True
    assert movie.set_flavor_level(5) is False
    assert movie.get_flavor().value == ("car chase", "helicopter jump")
    assert movie.get_info().flavor == ("car chase", "helicopter jump")


def test_flavor_for_general_genre():
    """Test that the general genre has no flavor payload."""
    assert GenreFlavor.for_genre(Genre.GENERAL) is None


def test_review_values_are_read_only():
    """Test that a review cannot be changed after creation."""
    review = Review("Ada", "Great fights", 4)
    with pytest.raises(AttributeError):
        review.text = "Changed"
    with pytest.raises(AttributeError):
        review.created_at = datetime(2000, 1, 1)


def test_review_formatted_date():
    """Test the long date format used in the review list."""
    review = Review("Ada", "Great fights", 4, created_at=datetime(2026, 10, 9, 18, 30))
    assert review.get_formatted_date() == "October 9, 2026"


def test_review_snapshot():
    """Test conversion of a review to its persisted form."""
    created = datetime(2026, 10, 19, 9, 0)
    snapshot = Review("Ada", "Great fights", 4, created_at=created).to_snapshot()

    assert snapshot.author == "Ada"
    assert snapshot.text == "Great fights"
    assert snapshot.rating == 4
    assert snapshot.date == created


@pytest.mark.parametrize("tag, expected", [
    ("ACTION", Genre.ACTION),
    ("sci-fi", Genre.SCI_FI),
    ("  Horror ", Genre.HORROR),
    ("General", Genre.GENERAL),
    ("Western", Genre.GENERAL),
    (None, Genre.GENERAL),
])
def test_genre_from_tag(tag, expected):
    """Test lookup of stored genre tags."""
    assert Genre.from_tag(tag) == expected
