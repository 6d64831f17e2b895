"""
Ghana Facility Insights — cleaning and coverage analytics for the Virtue Foundation facility survey.

Pipeline:
  1. CSV tokenizer (quoted fields, typed row schema)
  2. Field normalizers + facility builder (with completeness scoring)
  3. Dataset summary, region medical-desert risk, data-quality report
"""
