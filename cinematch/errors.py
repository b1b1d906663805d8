"""
Exceptions raised by the recommender engine.
"""


class InitializationFailure(RuntimeError):
	"""
	Raised when the engine cannot build its state (empty or malformed catalog,
	or a crash during factorization). The engine keeps the first instance and
	re-raises that same object on every later call until the process restarts.
	"""
