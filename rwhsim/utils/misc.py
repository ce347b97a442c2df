from IPython import get_ipython

def is_notebook() -> bool:
    """True inside a Jupyter kernel, where the process based joblib backend is avoided."""
    shell = get_ipython()
    return shell is not None and type(shell).__name__ == "ZMQInteractiveShell"
