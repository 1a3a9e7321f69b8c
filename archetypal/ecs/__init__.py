"""Systems, layered renderers and frame timing built on a world."""