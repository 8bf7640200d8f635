"""
Version 1 of the API.

The routes keep the public paths of the exercise tracker
(``/api/users`` and friends) and are mounted under ``/api``.
"""
