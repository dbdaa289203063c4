"""Release-branch and tag automation for the SFRA package repositories."""
