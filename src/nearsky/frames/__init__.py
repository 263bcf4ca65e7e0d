"""Reference-frame machinery: nutation, precession, and coordinate transforms."""
