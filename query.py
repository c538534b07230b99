# Queries over the indexed scene: list names by mode, get curve by name.

def list_names_by_mode(idx, mode):
    # mode as used by curve_eval, e.g. "global", "bezier", "catmull-rom"
    return idx['by_mode'].get(mode.lower(), [])

def get_curve(idx, name):
    return idx['by_name'].get(name)
