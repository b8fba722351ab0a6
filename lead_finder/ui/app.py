"""Tkinter based desktop application for the lead finder."""
from __future__ import annotations

import logging
import queue
import tkinter as tk
from concurrent.futures import Future, ThreadPoolExecutor
from tkinter import filedialog, messagebox, ttk
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config import ConfigurationError, load_default_configuration
from ..factory import build_orchestrator
from ..io import export_filename, write_leads
from ..models import LIMIT_CHOICES, InvalidSearchError, Lead, SearchParams
from ..orchestrator import SearchOrchestrator
from ..session import (
    EMPTY_SELECTION_MESSAGE,
    INVALID_SEARCH_MESSAGE,
    Outcome,
    OutcomeKind,
    SessionState,
    run_discovery,
    run_enrichment,
)


LOGGER = logging.getLogger(__name__)

COLUMNS = ("name", "category", "keywords", "email", "phone", "website", "address", "maps_link")
HEADINGS = ("Name", "Category", "Keywords", "Email", "Phone", "Website", "Address", "Maps Link")

DISCOVERY = "discovery"
ENRICHMENT = "enrichment"

Runner = Callable[[SearchOrchestrator, SessionState], Tuple[SessionState, Outcome]]


def read_search_form(values: Dict[str, str]) -> SearchParams:
    """Build :class:`SearchParams` from raw form strings."""

    try:
        limit = int(str(values.get("limit", "")).strip())
    except ValueError:
        limit = 10
    return SearchParams(
        city=values.get("city", "").strip(),
        country=values.get("country", "").strip(),
        keyword=values.get("keyword", "").strip(),
        limit=limit,
        instructions=values.get("instructions", "").strip(),
    )


def search_form_error(params: SearchParams) -> Optional[str]:
    try:
        params.validate()
    except InvalidSearchError:
        return INVALID_SEARCH_MESSAGE
    return None


def lead_row_values(lead: Lead) -> Tuple[str, ...]:
    return tuple(getattr(lead, column) or "—" for column in COLUMNS)


def filter_leads(leads: Iterable[Lead], term: str) -> List[Lead]:
    """Return the leads whose visible fields contain ``term`` (case-insensitive)."""

    term = term.strip().lower()
    if not term:
        return list(leads)
    return [
        lead
        for lead in leads
        if term in " ".join(getattr(lead, column) for column in COLUMNS).lower()
    ]


class SearchForm(ttk.LabelFrame):
    """Inputs describing the businesses to look for."""

    FIELD_LABELS = {
        "keyword": "Niche or keyword",
        "city": "City",
        "country": "Country",
    }

    def __init__(self, master: tk.Misc) -> None:
        super().__init__(master, text="1. Define your search")
        self.variables: Dict[str, tk.StringVar] = {}
        self.limit_var = tk.StringVar(value="10")
        self._build()

    # ------------------------------------------------------------------
    def _build(self) -> None:
        for column_index, (field_key, label) in enumerate(self.FIELD_LABELS.items()):
            ttk.Label(self, text=label).grid(row=0, column=column_index, sticky="w", padx=4, pady=(4, 0))
            variable = tk.StringVar()
            ttk.Entry(self, textvariable=variable).grid(row=1, column=column_index, sticky="ew", padx=4, pady=4)
            self.columnconfigure(column_index, weight=1)
            self.variables[field_key] = variable

        ttk.Label(self, text="Max results").grid(row=0, column=3, sticky="w", padx=4, pady=(4, 0))
        combobox = ttk.Combobox(self, textvariable=self.limit_var, state="readonly", width=6)
        combobox["values"] = [str(choice) for choice in LIMIT_CHOICES]
        combobox.grid(row=1, column=3, sticky="w", padx=4, pady=4)

        ttk.Label(self, text="Instructions (optional)").grid(row=2, column=0, columnspan=4, sticky="w", padx=4)
        self.instructions = tk.Text(self, height=3, wrap="word")
        self.instructions.grid(row=3, column=0, columnspan=4, sticky="ew", padx=4, pady=4)

    # ------------------------------------------------------------------
    def get_values(self) -> Dict[str, str]:
        values = {field: variable.get() for field, variable in self.variables.items()}
        values["limit"] = self.limit_var.get()
        values["instructions"] = self.instructions.get("1.0", "end")
        return values


class LeadFinderApp:
    """Main application window."""

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        self.root.title("Lead Finder")
        self.root.geometry("1200x760")
        self.root.minsize(960, 640)

        self.orchestrator = self._build_orchestrator()
        self.state = SessionState()
        self.event_queue: "queue.Queue[tuple]" = queue.Queue()
        self._executor = ThreadPoolExecutor(max_workers=2)
        self.tasks: Dict[str, Optional[Future]] = {DISCOVERY: None, ENRICHMENT: None}
        self.last_raw_text = ""

        self.status_var = tk.StringVar(value="Idle")
        self.filter_var = tk.StringVar()
        self.filter_var.trace_add("write", lambda *_: self.refresh_result_table())

        self._build_layout()
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self.root.after(100, self._poll_queue)

    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        container = ttk.Frame(self.root, padding=12)
        container.pack(fill="both", expand=True)
        container.columnconfigure(0, weight=1)
        container.rowconfigure(2, weight=1)

        self.search_form = SearchForm(container)
        self.search_form.grid(row=0, column=0, sticky="ew")

        actions = ttk.Frame(container)
        actions.grid(row=1, column=0, sticky="ew", pady=(8, 0))
        actions.columnconfigure(1, weight=1)
        self.search_button = ttk.Button(actions, text="Find leads", command=self.start_search)
        self.search_button.grid(row=0, column=0, padx=4, sticky="w")
        ttk.Label(actions, textvariable=self.status_var).grid(row=0, column=1, padx=8, sticky="w")

        self._build_results_section(container)

    # ------------------------------------------------------------------
    def _build_results_section(self, parent: ttk.Frame) -> None:
        frame = ttk.LabelFrame(parent, text="2. Leads")
        frame.grid(row=2, column=0, sticky="nsew", pady=(12, 0))
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(1, weight=1)

        toolbar = ttk.Frame(frame)
        toolbar.grid(row=0, column=0, sticky="ew", padx=4, pady=4)
        toolbar.columnconfigure(1, weight=1)

        ttk.Label(toolbar, text="Filter").grid(row=0, column=0, padx=(0, 8))
        ttk.Entry(toolbar, textvariable=self.filter_var).grid(row=0, column=1, sticky="ew")

        btn_bar = ttk.Frame(toolbar)
        btn_bar.grid(row=0, column=2, padx=(8, 0))
        ttk.Button(btn_bar, text="Select all", command=lambda: self.select_all(True)).pack(side="left", padx=(0, 4))
        ttk.Button(btn_bar, text="Select none", command=lambda: self.select_all(False)).pack(side="left", padx=(0, 4))
        self.enrich_button = ttk.Button(btn_bar, text="Enrich selected", command=self.start_enrichment)
        self.enrich_button.pack(side="left", padx=(0, 4))
        ttk.Button(btn_bar, text="Raw reply", command=self.show_raw_reply).pack(side="left", padx=(0, 4))
        ttk.Button(btn_bar, text="Export CSV", command=self.export_csv).pack(side="left", padx=(0, 4))
        ttk.Button(btn_bar, text="Export Excel", command=self.export_excel).pack(side="left", padx=(0, 4))
        ttk.Button(btn_bar, text="Clear", command=self.clear_results).pack(side="left")

        self.results_tree = ttk.Treeview(frame, columns=COLUMNS, show="headings", selectmode="extended")
        for column, heading in zip(COLUMNS, HEADINGS):
            self.results_tree.heading(column, text=heading)
            self.results_tree.column(column, anchor="w", width=140)
        self.results_tree.grid(row=1, column=0, sticky="nsew", padx=4, pady=4)
        self.results_tree.bind("<<TreeviewSelect>>", self._on_tree_select)

        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.results_tree.yview)
        self.results_tree.configure(yscrollcommand=scroll.set)
        scroll.grid(row=1, column=1, sticky="ns")

    # ------------------------------------------------------------------
    def _is_running(self, action: str) -> bool:
        task = self.tasks[action]
        return task is not None and not task.done()

    # ------------------------------------------------------------------
    def _submit(self, action: str, runner: Runner) -> None:
        base = self.state

        def worker() -> None:
            try:
                result, outcome = runner(self.orchestrator, base)
            except Exception as exc:  # pragma: no cover - GUI surface
                LOGGER.exception("Unexpected error during %s", action)
                result, outcome = base, Outcome(OutcomeKind.FAILED, str(exc))
            self.event_queue.put(("done", action, base, result, outcome))

        self.tasks[action] = self._executor.submit(worker)
        self._update_buttons()

    # ------------------------------------------------------------------
    def start_search(self) -> None:
        if self._is_running(DISCOVERY):
            messagebox.showinfo("Search running", "A search is already in progress.")
            return

        params = read_search_form(self.search_form.get_values())
        error = search_form_error(params)
        if error:
            messagebox.showwarning("Missing search criteria", error)
            return

        self.status_var.set("Searching...")
        self._submit(DISCOVERY, lambda orchestrator, state: run_discovery(orchestrator, state, params))

    # ------------------------------------------------------------------
    def start_enrichment(self) -> None:
        if self._is_running(ENRICHMENT):
            messagebox.showinfo("Enrichment running", "An enrichment job is already in progress.")
            return
        if not self.state.selected:
            messagebox.showinfo("No selection", EMPTY_SELECTION_MESSAGE)
            return

        self.status_var.set(f"Enriching {len(self.state.selected)} leads...")
        self._submit(ENRICHMENT, run_enrichment)

    # ------------------------------------------------------------------
    def select_all(self, selected: bool) -> None:
        self.state = self.state.select_all(selected)
        self.refresh_result_table()

    # ------------------------------------------------------------------
    def clear_results(self) -> None:
        self.state = self.state.cleared()
        self.last_raw_text = ""
        self.refresh_result_table()
        self.status_var.set("Results cleared")

    # ------------------------------------------------------------------
    def show_raw_reply(self) -> None:
        window = tk.Toplevel(self.root)
        window.title("Raw model reply")
        text = tk.Text(window, wrap="none", width=120, height=30)
        text.insert("1.0", self.last_raw_text or "(no reply yet)")
        text.configure(state="disabled")
        text.pack(fill="both", expand=True)

    # ------------------------------------------------------------------
    def export_csv(self) -> None:
        self._export(".csv", [("CSV", "*.csv")])

    # ------------------------------------------------------------------
    def export_excel(self) -> None:
        self._export(".xlsx", [("Excel", "*.xlsx")])

    # ------------------------------------------------------------------
    def _export(self, suffix: str, filetypes: List[Tuple[str, str]]) -> None:
        if not self.state.leads:
            messagebox.showinfo("No leads", "Run a search before exporting.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=suffix,
            initialfile=export_filename(suffix=suffix),
            filetypes=filetypes,
        )
        if not path:
            return
        try:
            write_leads(path, self.state.leads)
        except Exception as exc:  # pragma: no cover - GUI surface
            messagebox.showerror("Export failed", str(exc))
            return
        messagebox.showinfo("Export complete", f"Leads exported to {path}")

    # ------------------------------------------------------------------
    def _poll_queue(self) -> None:
        try:
            while True:
                event = self.event_queue.get_nowait()
                self._handle_event(event)
        except queue.Empty:
            pass
        finally:
            self.root.after(100, self._poll_queue)

    # ------------------------------------------------------------------
    def _handle_event(self, event: tuple) -> None:
        kind = event[0]
        if kind != "done":
            return
        _, action, base, result, outcome = event
        self.tasks[action] = None
        self.state = self.state.replay(base, result)
        if outcome.raw_text:
            self.last_raw_text = outcome.raw_text
        self.status_var.set(outcome.message)
        self.refresh_result_table()
        self._update_buttons()

        if outcome.kind is OutcomeKind.FAILED:
            messagebox.showerror("Request failed", outcome.message)
        elif outcome.kind is OutcomeKind.EMPTY:
            messagebox.showwarning("Nothing found", outcome.message)

    # ------------------------------------------------------------------
    def _update_buttons(self) -> None:
        self.search_button.configure(state="disabled" if self._is_running(DISCOVERY) else "normal")
        self.enrich_button.configure(state="disabled" if self._is_running(ENRICHMENT) else "normal")

    # ------------------------------------------------------------------
    def _on_tree_select(self, _event: object) -> None:
        visible = set(self.results_tree.get_children())
        # Leads hidden by the filter keep their selection.
        hidden = {lead_id for lead_id in self.state.selected if lead_id not in visible}
        selected = hidden | set(self.results_tree.selection())
        if selected != self.state.selected:
            self.state = self.state.with_selection(selected)

    # ------------------------------------------------------------------
    def refresh_result_table(self) -> None:
        self.results_tree.delete(*self.results_tree.get_children())
        for lead in filter_leads(self.state.leads, self.filter_var.get()):
            self.results_tree.insert("", "end", iid=lead.id, values=lead_row_values(lead))
        visible = [lead_id for lead_id in self.state.selected if self.results_tree.exists(lead_id)]
        self.results_tree.selection_set(visible)

    # ------------------------------------------------------------------
    def on_close(self) -> None:
        if any(self._is_running(action) for action in self.tasks):
            if not messagebox.askyesno("Quit", "A request is still running. Quit anyway?"):
                return
        self._executor.shutdown(wait=False, cancel_futures=True)
        self.root.destroy()

    # ------------------------------------------------------------------
    def _build_orchestrator(self) -> SearchOrchestrator:
        try:
            config = load_default_configuration()
        except ConfigurationError as exc:
            messagebox.showwarning("Configuration error", f"Failed to load configuration: {exc}")
            config = {}
        try:
            return build_orchestrator(config)
        except Exception as exc:
            LOGGER.exception("Could not create the model client")
            messagebox.showerror("Configuration error", f"Could not create the model client: {exc}")
            raise


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    root = tk.Tk()
    app = LeadFinderApp(root)
    root.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
