#!/usr/bin/env python3
"""
WordPlay Engine

Play the word transformation game in the terminal against the greedy
bot (or a second human), or run bot self-play with --simulate.

Requires: pip install wordfreq
A word list in dictionary.txt / enable.txt is used when present.
"""

from wordplay.cli import main

if __name__ == "__main__":
    main()
