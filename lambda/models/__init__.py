from .models import WordResult, CompletionRequest, ArchiveList, ParseTierEnum, FieldSourceEnum, ParseAttempt, CardVariantEnum, FontFamilyEnum, FontSpec, CanvasGeometry, FillRect, StrokeRect, Line, FillText, DrawOp

__all__ = ['WordResult', 'CompletionRequest', 'ArchiveList', 'ParseTierEnum', 'FieldSourceEnum', 'ParseAttempt', 'CardVariantEnum', 'FontFamilyEnum', 'FontSpec', 'CanvasGeometry',
           'FillRect', 'StrokeRect', 'Line', 'FillText', 'DrawOp']
