"""
Recommendation engine: turns a completed assessment into a short, ordered,
de-duplicated list of wellness recommendations using fixed keyword rules.

Modules
-------
rules    : reference questions, trigger rule table, default recommendations
           and the assembled DEFAULT_CATALOG as plain data.
deriver  : derive_recommendations() + RecommendationDeriver; pure functions,
           no DB or I/O.
reporter : plain-text rendering and JSON/CSV export of stored results.
"""
