"""Authentication provider boundary.

Answers "is the user signed in" and hands off to the hosted sign-in page.
Bounded Context: Access
"""
