"""Application layer: render accumulator, walker, generator, reporters."""
