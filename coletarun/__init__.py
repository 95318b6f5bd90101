"""Two-player arcade game: collect trash bags and sort them into matching bins."""

__version__ = "0.1.0"