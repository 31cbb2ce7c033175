from .summary_exporter import export_summary, save_summary, summary_from_json, summary_to_dict

__all__ = ["export_summary", "save_summary", "summary_from_json", "summary_to_dict"]
