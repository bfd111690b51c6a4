"""Domain layer for Nexus.

Pure models and functions - no I/O, no side effects:

    shared - Result monad, events, time and rounding helpers
    project - Project aggregate, stage state machine, budget arithmetic
    member - Members, teams and access control
    announcement - Announcements and their visibility
    notification - Notification derivation engine and feed
"""
