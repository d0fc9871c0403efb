"""Interactive UI-component demos backed by local stores."""

from folio.demos.combobox import ComboboxState, load_combobox, submit_combobox

__all__ = ["ComboboxState", "load_combobox", "submit_combobox"]
