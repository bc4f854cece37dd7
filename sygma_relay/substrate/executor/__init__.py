"""Building substrate proposals from transfer messages."""