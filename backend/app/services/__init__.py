# Services package init
"""
Aula Backend — Services Layer
===============================

What:  Business logic between routes (HTTP) and the store / file system.
How:   Services validate input and return `Result` values (Ok / Err);
       routes hand those to `app.responses.render` untouched.

Service Inventory:
    - ResourceService: list / create for materias, mensajes, noticias and
      tareas, configured by a ResourceDefinition
    - FileService: upload validation, storage, cleanup and path resolution
"""
