"""
Assessment Synthesis Pipeline
generation/

Steps:
1. Blueprint Builder    — marks → question count, Bloom-weighted mark table
2. Question Generator   — vision-model call with the image and prompt
3. Response Parser      — reply text → Q / part / sub-question fragments
4. Bloom Assigner       — (question, part) → taxonomy level, cyclic
5. CO Mapper            — question index → CO label
6. Paper Assembler      — records + reconciliation to the exact total
"""

from generation.pipeline import synthesize_assessment

__all__ = ["synthesize_assessment"]
