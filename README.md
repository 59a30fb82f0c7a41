# piksy

The editing core of a sprite and animation editor. It works on RGBA pixel
arrays: `numpy` arrays of shape `(height, width, 4)` and dtype `uint8`.

The package has these modules:

- `piksy.frames` finds sprite frames inside a selected area of a sheet.
- `piksy.colors` replaces one colour with another, within a tolerance.
- `piksy.export` writes a texture to a PNG file.
- `piksy.project_file` saves and loads the project state as JSON. The state
  covers the tool, the animations, their frames and the texture path.
- `piksy.explorer` builds a file-explorer tree of a directory and picks an
  icon for each file.
- `piksy.console` stores log messages and filters them for a console view.
- `piksy.viewport` holds the viewport logic for zoom, pan, selection and
  clicks.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Finding frames on a sheet

```python
import numpy as np
from piksy.frames import Rect, extract_frames

sheet = np.zeros((64, 128, 4), dtype=np.uint8)
sheet[8:24, 8:24] = (255, 0, 0, 255)
sheet[8:24, 40:56] = (0, 255, 0, 255)

frames = extract_frames(sheet, Rect(0, 0, 128, 64), [], False, False)
for frame in frames:
    print(frame.x, frame.y, frame.w, frame.h)
```

`extract_frames` works only on the part of `rect` that lies inside the image.
In that area it does the following:

1. It marks the pixels whose grey value is above 1.
2. It dilates the marked pixels by two pixels.
3. It returns the bounding box of each outer shape as a `Frame`.

The frames come back in reading order: rows run from top to bottom, and
frames run left to right within a row. Frames whose `y` values are close
count as one row.

Outside preview mode, a new frame is dropped if every coordinate is within 5
of a frame already in `existing` (see `frames_are_equal`). With
`append=True`, the new frames follow `existing`. Otherwise, and always in
preview mode, they replace it. The function returns a new list.

`Rect` has `intersection` and `intersects`. `sort_frames` returns its
frames in the same reading order.

## Swapping colours

```python
from piksy.colors import Color, pixel_color, swap_color

background = pixel_color(sheet, 0, 0)
replaced = swap_color(sheet, background, Color(255, 0, 255, 255), 0)
```

`swap_color` changes the array in place and returns the number of pixels it
replaced. A pixel is replaced when its squared RGBA distance from the source
colour is at most `threshold ** 2`. `pixel_color` raises `IndexError` for a
position outside the image.

## Exporting

```python
from piksy.export import export_texture

export_texture(sheet, "out/sheet.png")
```

The function creates any missing parent directories and returns the path.
It raises `ExportError` in these cases:

- there is no texture;
- the array has the wrong shape or is empty;
- the file cannot be written.

## Project files

```python
from piksy.frames import Frame
from piksy.project_file import (
    Animation, AnimationManager, ProjectState, Tool, load_project, save_project,
)

manager = AnimationManager()
manager.add_animation("walk", Animation("walk", [Frame(0, 0, 16, 16)]))
manager.set_current_animation("walk")
state = ProjectState(tool=Tool.EXTRACT, texture_path="sheet.png")

save_project("project/save.json", state, manager)
load_project("project/save.json", state, manager)
```

Saving works in three steps:

1. It writes `save.tmp` first.
2. It renames that file to `save.json`.
3. It copies the result to `save.bak`.

Extra keys stored in a frame's `data` are kept through a save and a later
load. `dump_project` and `apply_project` do the same work on plain
dictionaries, without touching any file. Bad or missing data raises
`ProjectFileError`.

## Explorer and console

`build_directory_cache(root)` reads the whole tree under `root` into
`DirectoryEntry` objects, sorted by name at every level. `icon_for(path)`
returns a Font Awesome 4 glyph chosen by the file extension.

`MessageLog` collects `LogMessage` objects. `ConsoleView.visible(messages)`
keeps the messages whose level is in `shown` and that pass `filter_text`.
The filter is a list of terms separated by commas:

- Terms are matched as substrings, ignoring case.
- A term that starts with `-` excludes the messages that match it.

## Viewport

`Viewport(manager, pixels, tool)` takes input for each frame as plain
arguments:

- `mouse_input(...)` takes the mouse state.
- `update(shift_down, backspace_down, escape_down)` takes the keys.

It keeps the zoom and pan state, and both ease towards their targets. With
`Tool.EXTRACT`, a drag shows a preview of the extracted frames. Those frames
are written into the current animation when the button is released. The
other tools behave as follows:

- `Tool.SELECT` selects the frames under the drag rectangle. Backspace
  deletes them.
- `Tool.PAN` moves the view.
- `Tool.COLOR_SWAP` replaces the clicked colour with `replacement_color`.

## What the package does not do

There is no window, no drawing and no command-line program. The viewport and
console classes hold state and rules only, and a front end must supply the
input and draw the result. Textures are not loaded from disk: a project
stores `texture_path` as a string, and the caller loads the pixels. Messages
go through the standard `logging` module.