"""
Simple image viewer window using tkinter.

show() opens a window with the image and a File menu for saving it.
"""

import os
import tkinter as tk
from tkinter import filedialog, messagebox

from PIL import ImageTk

from .errors import ImagezError
from .image_io import save
from .transform import zoom as zoom_image


DEFAULT_TITLE = "Imagez Frame"

SAVE_FILETYPES = [
    ('PNG files', '*.png'),
    ('JPEG files', '*.jpg'),
    ('GIF files', '*.gif'),
    ('All files', '*.*'),
]


class ImageFrame:
    """Window displaying a single image."""

    def __init__(self, root, image, title=DEFAULT_TITLE):
        """
        Initialize the frame.

        Args:
            root: tkinter root or Toplevel window
            image: PIL image to display
            title: Window title
        """
        self.root = root
        self.image = image
        self.root.title(title)
        self.root.configure(bg='#f0f0f0')

        self._setup_menu()

        # Keep a reference, tkinter does not
        self.photo = ImageTk.PhotoImage(image)
        self.label = tk.Label(self.root, image=self.photo, bg='#f0f0f0')
        self.label.pack(fill=tk.BOTH, expand=True)

    def _setup_menu(self):
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Save As...", command=self._save_as)
        file_menu.add_separator()
        file_menu.add_command(label="Close", command=self.root.destroy)
        menubar.add_cascade(label="File", menu=file_menu)
        self.root.config(menu=menubar)

    def _save_as(self):
        """Ask for a file name and save the displayed image."""
        filename = filedialog.asksaveasfilename(
            title="Save image",
            defaultextension='.png',
            filetypes=SAVE_FILETYPES,
            initialdir=os.getcwd()
        )

        if filename:
            try:
                save(self.image, filename)
            except ImagezError as e:
                messagebox.showerror("Error", f"Could not save image:\n{str(e)}")


def display_image(image, zoom=None):
    """The image as it will be shown, zoomed if a factor is given."""
    if zoom is None:
        return image
    return zoom_image(image, float(zoom))


def show(image, zoom=None, title=None, block=True):
    """
    Display an image in a new window.

    Args:
        image: PIL image
        zoom: Optional zoom factor
        title: Window title (default "Imagez Frame")
        block: Run the tkinter main loop until the window is closed

    Returns:
        The ImageFrame
    """
    shown = display_image(image, zoom)

    root = tk.Tk()
    frame = ImageFrame(root, shown, title or DEFAULT_TITLE)
    if block:
        root.mainloop()
    return frame
