# Build simple indices over a scene for lookup by curve name and mode.

def build_index(scene):
    by_name = {}
    by_mode = {}
    for c in scene['curves']:
        nm = c['name']
        by_name[nm] = c
        by_mode.setdefault(c['mode'], []).append(nm)
    return {
        'scene': scene,
        'by_name': by_name,
        'by_mode': by_mode
    }
