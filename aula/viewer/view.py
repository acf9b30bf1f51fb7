import tkinter as tk
from tkinter import ttk

from PIL import ImageTk

from ..config import APP_TITLE, VIEWER_GEOMETRY


class ViewerView(tk.Toplevel):
    def __init__(self, parent):
        super().__init__(parent)
        self.title(APP_TITLE)
        self.geometry(VIEWER_GEOMETRY)

        self.photo_image = None
        self.image_id = None

        self._build_layout()

    def _build_layout(self):
        # --- Top bar: back button and title ---
        self.top_bar = ttk.Frame(self, padding=5)
        self.top_bar.pack(side=tk.TOP, fill=tk.X)

        self.btn_back = ttk.Button(self.top_bar, text="Back")
        self.btn_back.pack(side=tk.LEFT, padx=2)
        self.lbl_title = ttk.Label(self.top_bar, text="", font=('Arial', 13, 'bold'))
        self.lbl_title.pack(side=tk.LEFT, padx=15)

        # --- Page and zoom controls (hidden while an error is shown) ---
        self.controls_frame = ttk.Frame(self, padding=5)

        self.btn_prev = ttk.Button(self.controls_frame, text="◀ Previous", width=10)
        self.btn_prev.pack(side=tk.LEFT, padx=2)
        self.lbl_page = ttk.Label(self.controls_frame, text="", font=('Arial', 10, 'bold'))
        self.lbl_page.pack(side=tk.LEFT, padx=5)
        self.btn_next = ttk.Button(self.controls_frame, text="Next ▶", width=10)
        self.btn_next.pack(side=tk.LEFT, padx=2)

        ttk.Separator(self.controls_frame, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, padx=10)

        self.btn_zoom_out = ttk.Button(self.controls_frame, text="🔍-", width=4)
        self.btn_zoom_out.pack(side=tk.LEFT)
        self.btn_zoom_in = ttk.Button(self.controls_frame, text="🔍+", width=4)
        self.btn_zoom_in.pack(side=tk.LEFT)

        # --- Error area (hidden while a page is shown) ---
        self.error_frame = ttk.Frame(self, padding=20)
        self.lbl_error = ttk.Label(self.error_frame, text="", foreground="red",
                                   justify=tk.LEFT, wraplength=800)
        self.lbl_error.pack(fill=tk.X)

        # --- Page canvas with scrollbars ---
        self.viewer_frame = ttk.Frame(self)
        self.viewer_frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        self.v_scroll = ttk.Scrollbar(self.viewer_frame, orient=tk.VERTICAL)
        self.v_scroll.pack(side=tk.RIGHT, fill=tk.Y)
        self.h_scroll = ttk.Scrollbar(self.viewer_frame, orient=tk.HORIZONTAL)
        self.h_scroll.pack(side=tk.BOTTOM, fill=tk.X)

        self.canvas = tk.Canvas(
            self.viewer_frame,
            bg="gray70",
            highlightthickness=0,
            xscrollcommand=self.h_scroll.set,
            yscrollcommand=self.v_scroll.set
        )
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.v_scroll.config(command=self.canvas.yview)
        self.h_scroll.config(command=self.canvas.xview)

    def show_image(self, image):
        """Replaces the canvas content with a PIL image."""
        # Tk only keeps a weak reference to the PhotoImage
        self.photo_image = ImageTk.PhotoImage(image=image)
        self.canvas.delete(tk.ALL)
        self.image_id = self.canvas.create_image(0, 0, image=self.photo_image, anchor=tk.NW)
        self.canvas.config(scrollregion=(0, 0, image.width, image.height))

    def show_error(self, message: str):
        self.lbl_error.config(text=message)
        self.controls_frame.pack_forget()
        if not self.error_frame.winfo_manager():
            self.error_frame.pack(side=tk.TOP, fill=tk.X, before=self.viewer_frame)

    def show_content(self):
        self.error_frame.pack_forget()
        if not self.controls_frame.winfo_manager():
            self.controls_frame.pack(side=tk.TOP, fill=tk.X, before=self.viewer_frame)

    def close(self):
        self.destroy()
