"""Single-choice voting service with one vote per client address."""
