"""Page acquisition — sources that turn live pages into PageSnapshots."""
