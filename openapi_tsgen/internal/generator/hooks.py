from typing import List, Optional

from ..types.models import OperationMetadata
from ..utils.naming import format_description

# Методы axios с телом запроса вторым аргументом
BODY_VERBS = ("post", "put", "patch")


class HooksGenerator:
    """react-query hooks поверх метаданных операции"""

    def __init__(self, encoding_mode: Optional[str] = None):
        self.encode = "encode" if encoding_mode else ""

    def render(self, metadata: OperationMetadata) -> str:
        output = format_description(metadata.description) + "\n"
        if metadata.verb == "get":
            return output + self._render_query(metadata)
        return output + self._render_mutation(metadata)

    def _path(self, route: str) -> str:
        return f"{self.encode}`{route}`"

    def _render_query(self, metadata: OperationMetadata) -> str:
        name = metadata.component_name
        response, error = metadata.generics[0], metadata.generics[1]
        path = self._path(metadata.route)

        props = self._path_fields(metadata)
        if metadata.query_params_type:
            props.append(f"params?: {metadata.query_params_type}")
        props.append(f"queryOptions?: UseQueryOptions<{response}, {error}>")

        args = list(metadata.params_in_path)
        if metadata.query_params_type:
            args.append("params")
        args.append("queryOptions")

        query_key = f"[{path}, params]" if metadata.query_params_type else path
        config = ", { params }" if metadata.query_params_type else ""

        output = (
            f"export interface Use{name}Props {{\n  "
            + ";\n  ".join(props)
            + ";\n}\n\n"
        )
        output += (
            f"export const use{name} = ({{ {', '.join(args)} }}: Use{name}Props) =>\n"
            f"  useQuery<{response}, {error}>(\n"
            f"    {query_key},\n"
            f"    () => axios.get<{response}>({path}{config}).then((res) => res.data),\n"
            "    { refetchOnMount: false, ...queryOptions }\n"
            "  );\n\n"
        )

        if metadata.params_in_path:
            invalidate_args = (
                f"{{ {', '.join(metadata.params_in_path)} }}: {metadata.path_params_type}"
            )
        else:
            invalidate_args = ""
        output += (
            f"export const useInvalidate{name} = ({invalidate_args}) =>\n"
            f'  useInvalidateQuery({path}, "invalidate{name}");\n\n'
        )
        return output

    def _render_mutation(self, metadata: OperationMetadata) -> str:
        name = metadata.component_name
        response, error = metadata.generics[0], metadata.generics[1]
        variables_type = f"Use{name}Variables"

        route = metadata.route
        id_name = self._id_name(metadata)
        if id_name:
            route += f"/${{{id_name}}}"
        path = self._path(route)

        fields = self._path_fields(metadata)
        args = list(metadata.params_in_path)
        if id_name:
            fields.append(f"{id_name}: {metadata.id_type}")
            args.append(id_name)
        if metadata.query_params_type:
            fields.append(f"params?: {metadata.query_params_type}")
            args.append("params")
        if metadata.request_body_type:
            fields.append(f"body: {metadata.request_body_type}")
            args.append("body")

        config = ", { params }" if metadata.query_params_type else ""
        if metadata.verb in BODY_VERBS:
            body = "body" if metadata.request_body_type else "undefined"
            call = f"axios.{metadata.verb}<{response}>({path}, {body}{config})"
        else:
            call = f"axios.{metadata.verb}<{response}>({path}{config})"

        output = ""
        if fields:
            output += (
                f"export interface {variables_type} {{\n  "
                + ";\n  ".join(fields)
                + ";\n}\n\n"
            )
            arguments = f"({{ {', '.join(args)} }})"
        else:
            variables_type = "void"
            arguments = "()"

        output += (
            f"export const use{name} = (\n"
            f"  mutationOptions?: UseMutationOptions<{response}, {error}, {variables_type}>\n"
            ") =>\n"
            f"  useMutation<{response}, {error}, {variables_type}>(\n"
            f"    {arguments} => {call}.then((res) => res.data),\n"
            "    mutationOptions\n"
            "  );\n\n"
        )
        return output

    @staticmethod
    def _path_fields(metadata: OperationMetadata) -> List[str]:
        if not metadata.params_types:
            return []
        return [metadata.params_types]

    @staticmethod
    def _id_name(metadata: OperationMetadata) -> Optional[str]:
        """Имя переменной для вынесенного параметра DELETE: `id`, если оно не занято путем"""
        if not metadata.id_param:
            return None
        if "id" in metadata.params_in_path:
            return metadata.id_param
        return "id"
