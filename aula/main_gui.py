import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Dict, Optional

from . import database
from .config import APP_GEOMETRY, APP_TITLE, CONTENT_KINDS
from .errors import UploadError
from .navigation import MY_ITEMS, OWNER_ITEMS, BackRoute
from .session import Session, start_session
from .uploads import store_upload
from .viewer import open_viewer

logger = logging.getLogger(__name__)


class AulaApp:
    """Main window: one tab per content kind listing the records to open."""

    def __init__(self, master, session: Session):
        self.master = master
        self.session = session
        master.title(APP_TITLE)
        master.geometry(APP_GEOMETRY)

        self.trees: Dict[str, ttk.Treeview] = {}
        self.filter_labels: Dict[str, ttk.Label] = {}
        self.filters: Dict[str, Optional[int]] = {kind: None for kind in CONTENT_KINDS}

        self.setup_gui()
        for kind in CONTENT_KINDS:
            self.load_records(kind)

    def setup_gui(self):
        self.notebook = ttk.Notebook(self.master)
        self.notebook.pack(fill='both', expand=True, padx=10, pady=10)

        for kind, conf in CONTENT_KINDS.items():
            tab = ttk.Frame(self.notebook, padding=5)
            self.notebook.add(tab, text=conf["plural"])

            bar = ttk.Frame(tab)
            bar.pack(side='top', fill='x', pady=(0, 5))
            self.filter_labels[kind] = ttk.Label(bar, text=f"All {conf['plural'].lower()}")
            self.filter_labels[kind].pack(side='left')
            ttk.Button(bar, text="Show all", command=lambda k=kind: self.show_all(k)).pack(side='right')
            ttk.Button(bar, text="Attach PDF...", command=lambda k=kind: self.attach_pdf(k)).pack(side='right', padx=5)

            tree = ttk.Treeview(tab, columns=("title", "teacher", "pdf"), show="headings")
            tree.heading("title", text="Title")
            tree.heading("teacher", text="Teacher")
            tree.heading("pdf", text="PDF")
            tree.column("teacher", width=80, anchor='center')
            tree.pack(fill='both', expand=True)
            tree.bind("<Double-1>", lambda event, k=kind: self.open_selected(k))
            self.trees[kind] = tree

    def load_records(self, kind: str):
        tree = self.trees[kind]
        tree.delete(*tree.get_children())
        for record in database.list_records(kind, self.filters[kind]):
            tree.insert("", tk.END, iid=str(record.id),
                        values=(record.title, record.owner_id or "", record.pdf_path or ""))

    def show_all(self, kind: str):
        self.filters[kind] = None
        self.filter_labels[kind].config(text=f"All {CONTENT_KINDS[kind]['plural'].lower()}")
        self.load_records(kind)

    def open_selected(self, kind: str):
        selection = self.trees[kind].selection()
        if not selection:
            return
        open_viewer(self.master, kind, self.session, record_id=int(selection[0]),
                    navigate=self.navigate_back)

    def attach_pdf(self, kind: str):
        """Uploads a PDF for the selected row and points the record at it."""
        selection = self.trees[kind].selection()
        if not selection:
            messagebox.showinfo("Attach PDF", f"Select a {CONTENT_KINDS[kind]['noun']} first.")
            return
        source = filedialog.askopenfilename(title="Select PDF", filetypes=[("PDF files", "*.pdf")])
        if not source:
            return
        try:
            stored = store_upload(source, kind)
        except UploadError as e:
            logger.warning("Upload failed: %s", e)
            messagebox.showerror("Upload error", str(e))
            return
        database.update_pdf_path(kind, int(selection[0]), stored)
        self.load_records(kind)

    def navigate_back(self, route: BackRoute, kind: str):
        """Shows the list the viewer's back button leads to."""
        plural = CONTENT_KINDS[kind]["plural"]
        if route.destination == MY_ITEMS:
            self.filters[kind] = self.session.user_id
            self.filter_labels[kind].config(text=f"My {plural.lower()}")
        elif route.destination == OWNER_ITEMS:
            self.filters[kind] = route.owner.id
            self.filter_labels[kind].config(text=f"{plural} of {route.owner.name}")
        else:
            self.filters[kind] = None
            self.filter_labels[kind].config(text=f"All {plural.lower()}")

        self.load_records(kind)
        self.notebook.select(list(CONTENT_KINDS).index(kind))


def main(user_id: Optional[int] = None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    database.setup_database()

    session = start_session(user_id)

    root = tk.Tk()
    AulaApp(root, session)
    root.mainloop()


if __name__ == "__main__":
    main()
