"""Document I/O: readers producing SheetSets and the sorted workbook writer."""
