"""Page views composed by the application shell."""
